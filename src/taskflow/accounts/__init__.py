"""
Account subsystem.

Components:
- account_models.py: Account / AccountInput + record (JSON) mapping
- validation.py: registration field rules
- account_store.py: AccountRepository (uniqueness, member IDs, update/delete by email)
- account_export.py: JSON export of all accounts
- account_api.py: high-level flows (register, profile update, delete, logout)
"""
