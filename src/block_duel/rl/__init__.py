"""Agent scripts for the BlockDuel gymnasium environment."""
