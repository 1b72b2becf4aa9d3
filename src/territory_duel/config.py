"""
Configuration for the 6x6 territory game and its computer opponent.
"""

# Board Configuration
BOARD_CONFIG = {
    'size': 6,                      # Fixed 6x6 grid
    'rectangle_shape': (3, 2),      # 3x2 and its 2x3 rotation win
    'run_length': 5,                # Five in a row wins
    'quota_block_size': 2,          # 3x3 tiling of fixed 2x2 blocks
    'quota_required': 2,            # Blocks needed for a region-quota win
}

# Opponent Configuration
AI_CONFIG = {
    'default_tier': 'balanced',     # Used when no difficulty is given
    'search_depth': 2,              # Plies for the strong tier's minimax

    # Advanced blocking order for the strong tier.
    # False checks open three, rectangle, quota, then open four last.
    'block_four_before_three': True,

    # Static evaluator weights
    'evaluator_weights': {
        'area': 10.0,
        'area_total_factor': 0.1,
        'potential': 5.0,
        'center': 2.0,
    },
    'potential_weights': {
        'rectangle': 3,             # 5 of 6 cells of a 3x2/2x3 block
        'quota': 2,                 # 3 of 4 cells of a fixed 2x2 block
        'five': 4,                  # 4 of 5 cells of a five-cell window
    },
    'center_weights': {
        'owned': 2.0,
        'empty': 0.5,
    },
}

# Session Configuration
SESSION_CONFIG = {
    'max_message_length': 500,      # Characters per chat message
    'max_chat_history': 50,         # Messages kept per game
    'stale_after_seconds': 24 * 60 * 60,
    'cleanup_interval_seconds': 60 * 60,
    'computer_id': 'computer',      # Sentinel occupying the computer's slot
}
