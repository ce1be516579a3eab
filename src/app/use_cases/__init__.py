"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows
- users/: User management
"""
