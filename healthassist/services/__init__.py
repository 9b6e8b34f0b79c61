"""Service layer between the HTTP app and the scoring engine."""
