"""Domain layer: identity aggregates, value objects and repository interfaces."""
