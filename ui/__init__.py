"""
ui/
---
Presentation data layer.

    from ui import annotate_graph
    from ui import code_panel, step_panel, playback_panel, ...
"""

from ui.canvas import annotate_graph, CURRENT, VISITED, HIGHLIGHTED

from ui.controls import (
    code_panel,
    step_panel,
    playback_panel,
    algorithm_cards,
    empty_state,
)

__all__ = [
    "annotate_graph",
    "CURRENT",
    "VISITED",
    "HIGHLIGHTED",
    "code_panel",
    "step_panel",
    "playback_panel",
    "algorithm_cards",
    "empty_state",
]
