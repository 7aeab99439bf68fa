"""hubtags — summarize Docker Hub tags by platform and digest."""
