"""Docker Hub access: repository references, raw tag records and the HTTP client."""
