"""smarthealth: client core for the Smart Health personal tracker.

REST API client, local persistence helpers, derived health metrics,
optimistic list trackers, and a small terminal front end.
"""

__version__ = "0.1.0"
