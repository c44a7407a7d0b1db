"""
Restaurant reviews.

Responsibilities:
- Append reviews to a restaurant and keep its average rating current.
- List a restaurant's reviews joined with each author's public profile.
"""
