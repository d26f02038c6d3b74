"""
Accommodation API - models, DTOs, repositories and entity services for
airports, gifts, restaurants and meal addition templates.
"""
