# Policy names and column indices shared across modules

# temperature decrement rules
DECREMENT_CONSTANT = "constant"
DECREMENT_AVL      = "avl"  # Aarts and van Laarhoven
DECREMENT_RULES    = (DECREMENT_CONSTANT, DECREMENT_AVL)

# stop criteria
STOP_OVG       = "ovg"  # Otten and van Ginneken
STOP_SSV       = "ssv"  # Sechen and Sangiovanni-Vincentelli
STOP_CRITERIA  = (STOP_OVG, STOP_SSV)

# built-in datasets
BENCHMARK_SQUARE = "square"  # 12 cities on the perimeter of a 3x3 square
BENCHMARK_RANDOM = "random"

# metrics rows
M_CHAIN   = 0
M_TEMP    = 1
M_CURR    = 2
M_BEST    = 3
M_MEAN    = 4
M_STD     = 5
M_ACCEPT  = 6
F_METRICS = 7 # 7 columns
