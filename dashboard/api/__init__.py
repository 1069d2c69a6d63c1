from . import session, habits, entries, goals, calendar, transfer, backups

routers = [
    session.router,
    habits.router,
    entries.router,
    goals.router,
    calendar.router,
    transfer.router,
    backups.router
]

__all__ = ['routers']
