"""
Storage layer.

Components:
- kv_store.py: SQLite-backed durable key-value store
- file_store.py: directory-rooted text file store with atomic writes
- tiered.py: file-primary / key-value-mirror persistence for the account list
"""
