"""
Run the FastAPI backend server.
"""

import os

import uvicorn


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print("=" * 60)
    print("Doubles Court Scheduling API Server")
    print("=" * 60)
    print(f"Starting server on http://localhost:{port}")
    print(f"API Documentation: http://localhost:{port}/docs")
    print("=" * 60)
    
    uvicorn.run(
        "doubles_scheduler.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info"
    )
