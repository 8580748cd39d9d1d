from changelens.navigation.history import NavigationHistory
from changelens.navigation.pager import PLACEHOLDER_URL, Pager, PagerLink, build_pager
from changelens.navigation.routes import ROOT_PATH, Route, parse_route

__all__ = [
    "NavigationHistory",
    "PLACEHOLDER_URL",
    "Pager",
    "PagerLink",
    "ROOT_PATH",
    "Route",
    "build_pager",
    "parse_route",
]
