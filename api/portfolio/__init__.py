"""
Portfolio content: projects and skills exposed over CRUD routes.
"""
