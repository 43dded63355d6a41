"""
Configuration for the Bagh Chal engine.
"""

# Search Configuration
SEARCH_CONFIG = {
    'time_limit_ms': 1000,              # Default budget per AI move
    'check_interval': 512,              # Poll the clock every N nodes
    'placement_depth': 5,               # Target depth while goats are being placed
    'movement_depth': 6,                # Movement phase, fewer than 2 goats captured
    'endgame_depth': 8,                 # Movement phase, 2+ goats captured
    'endgame_captures': 2,              # Captures that switch to endgame depth
}

# Evaluation weights (score is Tiger-relative: positive favours Tiger)
EVALUATION_CONFIG = {
    'captured_weight': 2000,            # Per goat captured
    'mobility_weight': 20,              # Per unit of tiger mobility (step=1, jump=2)
    'trapped_weight': 500,              # Per tiger with no step and no jump
    'clustering_weight': 10,            # Per goat-goat adjacency
}

# Zobrist hashing
ZOBRIST_CONFIG = {
    'seed': 42,                         # Fixed seed: fingerprints are reproducible across runs
}

# Controller defaults
CONTROLLER_CONFIG = {
    'human_side': 'goat',               # 'goat' or 'tiger'
    'ai_time_limit_ms': 1000,
}
