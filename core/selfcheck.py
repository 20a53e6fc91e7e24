"""
core.selfcheck
Minimal "it runs" proof for the attribute rules.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

from .catalog import ACTIONS
from .effects import applied_delta, apply_effect, can_apply, reverse_effect
from .state import ActionEntry, attributes_to_dict, default_start_state


def run_catalog_smoke(rounds: int = 3) -> None:
    state = default_start_state()
    attrs = state.attributes
    logs = []

    for _ in range(rounds):
        for action in ACTIONS:
            if not can_apply(attrs, logs, action):
                continue
            after = apply_effect(attrs, action.effects)
            logs.insert(0, ActionEntry(action.name, "selfcheck", applied_delta(attrs, after, action.effects)))
            attrs = after

            # invariants
            assert min(attributes_to_dict(attrs).values()) >= 0

    once_only = [a for a in ACTIONS if a.once_only]
    for action in once_only:
        assert sum(1 for e in logs if e.action == action.name) <= 1

    # undo everything, newest first
    for entry in list(logs):
        attrs = reverse_effect(attrs, entry.effects)
    assert attrs == default_start_state().attributes, attrs

    print("OK: catalog smoke test passed.")
    print("Log size:", len(logs))


if __name__ == "__main__":
    run_catalog_smoke()
