"""Guild hero recruitment: negotiation engine and seasonal calendar."""
