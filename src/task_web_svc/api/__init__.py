"""FastAPI application package for task_web_svc."""
