"""
API package containing versioned routes and the exception handlers
shared by every version.
"""
