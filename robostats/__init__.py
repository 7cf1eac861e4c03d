"""RoboStats: team, rankings and skills summaries over the RobotEvents API.

Public API:
    from robostats import RobotEventsClient, create_app
    from robostats import get_team_stats, get_rankings, get_skills

Usage:
    client = RobotEventsClient(token)
    get_team_stats(client, "VRC", "8768A")
    get_rankings(client, "RE-VRC-23-1234", 5)
    app = create_app(client=client)   # FastAPI app
"""

from .client import RobotEventsClient, RobotEventsError
from .event_stats import get_rankings, get_rankings_text, get_skills, get_skills_text
from .server import create_app
from .team_stats import get_team_stats

__all__ = [
    "RobotEventsClient",
    "RobotEventsError",
    "create_app",
    "get_rankings",
    "get_rankings_text",
    "get_skills",
    "get_skills_text",
    "get_team_stats",
]
