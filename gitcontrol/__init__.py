"""Gatekeeper for git over SSH, run as the forced command of each user's key."""
