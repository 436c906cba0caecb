from .handlers import TrackerBot, build_application
from .sessions import SessionStore
