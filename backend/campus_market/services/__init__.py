# Services package init
"""
Campus Market Backend: Services Layer
=======================================

Service Inventory:
    - normalizer:      locale-formatted points text → float
    - score_service:   scoreboard filtering and ranking
    - resource_store:  generic JSON document store (ResourceKind / ResourceStore)
    - resources:       the four resource kinds and their store singletons
    - poll_service:    voting on stored polls
    - file_service:    image upload validation, storage and lookup
"""
