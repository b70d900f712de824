"""Publish PROS template depots built from GitHub release assets."""
