from .stats import router as stats_router
from .days import router as days_router
from .goals import router as goals_router
from .webhook import router as webhook_router
