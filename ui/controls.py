"""
controls.py - UI Control Panels
=================================
Every panel is a pure function that takes state and returns a JSON-safe
dict for the page to lay out.

Panels:
  - code_panel       : pseudocode with the active line
  - step_panel       : "Step i of n" and the step's explanation
  - playback_panel   : play/pause state, position and speed
  - algorithm_cards  : one card per registered algorithm
  - empty_state      : what to show when there is no graph

Design:
  - All panels are stateless.
  - Step indices are 0-based internally and 1-based in what the learner
    reads.
"""

from typing import Any, Dict, List, Optional, Sequence

from algorithms import Algorithm
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Pseudocode viewer
# ---------------------------------------------------------------------------
def code_panel(algorithm: Algorithm, step: Optional[Step] = None) -> Dict[str, Any]:
    """Pseudocode lines; `active_line` is None before a run."""
    active = step.source_line if step is not None else None
    return {
        "algorithm_id": algorithm.id,
        "title":        algorithm.name,
        "lines": [
            {"index": i, "text": text, "active": i == active}
            for i, text in enumerate(algorithm.pseudocode)
        ],
        "active_line": active,
    }


# ---------------------------------------------------------------------------
# Step explanation
# ---------------------------------------------------------------------------
def step_panel(step: Optional[Step], index: int, total: int) -> Dict[str, Any]:
    if step is None or total == 0:
        return {
            "label":       "No steps yet",
            "description": "Choose an algorithm and press Run to record its steps.",
            "data":        [],
        }
    return {
        "label":       f"Step {index + 1} of {total}",
        "description": step.description,
        "data":        [[key, value] for key, value in step.data.to_dict().items() if key != "family"],
        "family":      step.data.family,
        "is_final":    step.is_final,
    }


# ---------------------------------------------------------------------------
# Playback controls
# ---------------------------------------------------------------------------
def playback_panel(controller) -> Dict[str, Any]:
    """`controller` is an engine.playback.PlaybackController."""
    snap = controller.snapshot()
    total = snap["total_steps"]
    snap.update({
        "play_label":    "Pause" if controller.is_playing else "Play",
        "can_step_back": total > 0 and controller.index > 0,
        "can_step_next": total > 0 and controller.index < total - 1,
    })
    return snap


# ---------------------------------------------------------------------------
# Algorithm selector
# ---------------------------------------------------------------------------
def algorithm_cards(algorithms: Sequence[Algorithm], selected_id: Optional[str] = None) -> List[Dict[str, Any]]:
    cards = []
    for algo in algorithms:
        card = algo.to_dict()
        del card["pseudocode"]
        card["selected"] = algo.id == selected_id
        cards.append(card)
    return cards


# ---------------------------------------------------------------------------
# Empty state
# ---------------------------------------------------------------------------
def empty_state() -> Dict[str, Any]:
    return {
        "title":   "No Graph Available",
        "message": (
            "Describe a graph in the text box, pick a sample, or generate one "
            "to start visualizing algorithms."
        ),
    }
