#rounding tolerance; differences below this are treated as exactly zero error
EPS = 1e-10

#size of the "top errors" table and half-width of the zoom window (in steps)
TOP_K = 5
ZOOM_RADIUS_STEPS = 5

# defaults substituted by the input layer when a value is missing or not positive
DEFAULT_DX = 0.001
DEFAULT_PRECISION = 0.01

# default initial condition and horizon
DEFAULT_Y0 = 1.0
DEFAULT_X0 = 0.0
DEFAULT_X = 10.0

# upper bound on grid steps per trajectory; dx far smaller than X would never finish
MAX_STEPS = 10_000_000

#grid nodes may miss the zoom bounds by a few ulps; widen the filter by this fraction of dx
WINDOW_SLACK = 1e-6
