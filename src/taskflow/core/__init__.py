"""
Core contracts.

Components:
- ports.py: storage / notification Protocols the repositories depend on
- errors.py: the caller-facing error taxonomy
- session.py: explicit Session value + persisted session keys
- state.py: AppState wiring used by the CLI
"""
