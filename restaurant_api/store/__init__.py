"""
Document store layer.

Responsibilities:
- Build the MongoDB client from environment configuration.
- Name the collections the service reads and writes.
- Turn BSON documents into JSON-safe dicts for responses.
- Hand the injected database handle to request handlers.
"""
