"""
Веб-дашборд HealthTracker (FastAPI)
"""
