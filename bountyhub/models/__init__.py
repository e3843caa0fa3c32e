"""
BountyHub
SQLAlchemy extension instance shared by all model modules.

Usage:
    from bountyhub.models import db
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
