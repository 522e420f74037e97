"""Remote service-status polling and the shared published status."""
