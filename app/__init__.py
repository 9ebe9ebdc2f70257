"""Let's Eat server: nearby dining venue search and ranking."""
