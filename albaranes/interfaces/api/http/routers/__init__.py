"""Sub-routers por feature (users, clients, projects, delivery notes, mail)."""
