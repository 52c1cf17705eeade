from teamgate.teams.directory import TeamDirectory, resolve_team
from teamgate.teams.initializer import InitializationHandle, TeamInitializer, select_group_fetches
from teamgate.teams.joiner import MembershipJoiner
from teamgate.teams.marker import JoinedOnLoadStore

__all__ = [
    "InitializationHandle",
    "JoinedOnLoadStore",
    "MembershipJoiner",
    "TeamDirectory",
    "TeamInitializer",
    "resolve_team",
    "select_group_fetches",
]
