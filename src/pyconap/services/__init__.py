"""Entity services: creation, update and state-transition rules.

Each entity module exposes the same transition surface:

* ``is_valid_transition(current, nuevo)``
* ``get_allowed_next(current)``
* ``apply_transition(entity, nuevo, ...)``

``apply_transition`` raises :class:`~pyconap.exceptions.InvalidTransitionError`
for a disallowed pair, so callers gate on ``is_valid_transition`` first.
"""
