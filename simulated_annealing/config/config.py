# Simple parameter defaults (extend freely)
DEFAULTS = {
    "n_samples": 1000,           # configurations drawn to estimate T0 and the energy reference
    "neighborhood_size": None,   # Markov chain length; None -> n * (n - 1) for tours
    "decrement_rule": "avl",
    "decrement_factor": 0.9,     # constant rule
    "distance_parameter": 0.085, # Aarts-van Laarhoven rule
    "stop_criterion": "ovg",
    "stop_threshold": 1e-4,      # Otten-van Ginneken
    "maximum_repeat": 3,         # Sechen-Sangiovanni-Vincentelli
    "max_chains": 0,             # 0 = unbounded, rely on the stop criterion
    "time_limit": 0.0,           # seconds, checked between chains; 0 = none
    "log_period": 1,             # record metrics every N chains
}
