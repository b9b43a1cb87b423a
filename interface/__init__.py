"""Front-ends for the game session: REST API and terminal CLI."""
