"""
Feature modules for the Todo List backend.

- auth: password hashing, token signing and the signup/signin/recovery flows
- users: the user directory (Supabase `users` table) and profile edits
- notifications: SMTP email with HTML templates

Modules depend on each other's interfaces.py protocols, never on the
concrete classes; api/dependencies.py does the wiring.
"""
