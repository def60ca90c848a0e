"""
View package: Textual app, session wiring and formatting helpers.
"""

from userpager.view.app import UserBrowserApp
from userpager.view.session import Session, build_session

__all__ = ["Session", "UserBrowserApp", "build_session"]
