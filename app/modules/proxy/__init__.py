"""Translation proxy service: the remote translator as a FastAPI app."""
