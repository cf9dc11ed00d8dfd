"""
users — profile read / partial update for the authenticated user.
"""
