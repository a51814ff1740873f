"""SQLAlchemy persistence helpers."""
