"""Run the adaptive UX API locally."""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "adaptive_ux.main:app",
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
        reload=os.environ.get("RELOAD", "") == "1",
    )
