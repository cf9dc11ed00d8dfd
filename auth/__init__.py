"""
auth — signup, login and the request guard.

Provides:
  • Session token issuing & verification (HMAC-SHA256)
  • Password hashing (bcrypt)
  • Signup / Login API routes
  • ``get_current_user`` FastAPI dependency
"""
