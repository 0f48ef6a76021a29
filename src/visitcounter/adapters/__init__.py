"""
Infrastructure Adapters

- api: FastAPI app exposing the counter service
- proxy: path-rewriting proxy that forwards /backend/* to the counter service
"""
