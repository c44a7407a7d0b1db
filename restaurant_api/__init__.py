"""
Restaurant REST API.

Responsibilities:
- Create, read, update, search and delete restaurants stored in MongoDB.
- Manage each restaurant's embedded menu.
- Record reviews and keep the average review rating current.
"""
