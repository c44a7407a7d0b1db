"""
Restaurant resource.

Responsibilities:
- Define the restaurant, dish and cuisine shapes accepted by the API.
- Persist, look up, update and delete restaurant documents.
"""
