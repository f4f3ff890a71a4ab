"""
Run Celery worker for async schedule generation.
"""

import os

from doubles_scheduler.core.celery_app import celery_app

if __name__ == "__main__":
    print("=" * 60)
    print("Doubles Court Scheduling - Celery Worker")
    print("=" * 60)
    
    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        "--concurrency=2",
        "--pool=solo" if os.name == "nt" else "--pool=prefork"  # Use solo pool on Windows
    ])
