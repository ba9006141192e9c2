"""CORS configuration for the FastAPI application."""

import os

from .environment import IS_PRODUCTION_ENVIRONMENT

# CORS Origins configuration
ALLOWED_ORIGINS = {
    False: ["*"],  # Development - allow all
    True: [        # Production - restricted to the portal frontends
        origin.strip()
        for origin in os.environ.get('PORTAL_ALLOWED_ORIGINS', '').split(',')
        if origin.strip()
    ]
}

# CORS Methods configuration
ALLOWED_METHODS = [
    "GET",      # Listings, exports and templates
    "POST",     # Creating events, moderation actions, imports
    "PUT",      # Editing department events
    "DELETE",   # Deleting active and flagged events
    "OPTIONS"   # Required for CORS preflight
]

# CORS Headers configuration
ALLOWED_HEADERS = [
    "Authorization",  # For admin endpoints
    "Content-Type",   # For request bodies
    "Accept",        # For content negotiation
]

# Additional CORS settings
CORS_CONFIG = {
    "allow_origins": ALLOWED_ORIGINS[IS_PRODUCTION_ENVIRONMENT],
    "allow_credentials": True,
    "allow_methods": ALLOWED_METHODS,
    "allow_headers": ALLOWED_HEADERS,
    "expose_headers": ["Content-Disposition"],
    "max_age": 3600,
}
