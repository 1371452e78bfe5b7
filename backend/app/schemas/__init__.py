# app/schemas/__init__.py
"""
Schema module initialization.
Exports all schema classes from submodules for convenient imports.
"""
from .base import parse_body
from .auth import *
from .profile import *
from .post import *
