"""State/store layer.

This package is the single source of truth for how server answers are
folded into a per-area snapshot: tagged actions, a pure reducer over
them, and the :class:`~campusdesk.state.store.DomainStore` that drives
both.
"""
