"""Data models for Creature Cup tournaments and playoff brackets."""
