# Routes package init
"""
Campus Market Backend: API Routes Package
===========================================

Route Inventory:
    - health.py:         GET  /                      (banner)
                         GET  /health                (service health check)
    - scores.py:         GET  /api/scores            (ranked scoreboard)
    - announcements.py:  GET/POST /api/announcements, DELETE /api/announcements/{id}
    - discounts.py:      GET/POST /api/discounts,     DELETE /api/discounts/{id}
    - polls.py:          GET/POST /api/polls,         DELETE /api/polls/{id}
                         POST /api/polls/vote
    - hours.py:          GET/POST /api/hours
    - uploads.py:        POST /api/upload, GET /uploads/{name}

Routes stay thin: pull the data out of the request, call the store or
service, return its result. Errors propagate as CampusMarketError
subclasses and are rendered by the handlers in main.py.
"""
