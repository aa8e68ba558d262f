"""
auth — User authentication module.

Provides:
  • Signed session tokens (HMAC-SHA256, 1 hour lifetime)
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``get_current_user`` FastAPI dependency
"""
