"""Board, rule, configuration and rendering for the illness automaton"""

from .board import (
    Board,
    RuleParameters,
    transition_rule,
    next_state,
    simulate,
    HEALTHY,
    ILLED
)
from .config import SimulationConfig
from .patterns import get_pattern, get_all_patterns, place_pattern, PATTERN_CATEGORIES
from .visualization import (
    render_frame,
    frame_path,
    save_frame,
    visualize_state,
    visualize_trajectory,
    create_animation,
    plot_population_history
)

__all__ = [
    'Board',
    'RuleParameters',
    'transition_rule',
    'next_state',
    'simulate',
    'HEALTHY',
    'ILLED',
    'SimulationConfig',
    'get_pattern',
    'get_all_patterns',
    'place_pattern',
    'PATTERN_CATEGORIES',
    'render_frame',
    'frame_path',
    'save_frame',
    'visualize_state',
    'visualize_trajectory',
    'create_animation',
    'plot_population_history',
]
