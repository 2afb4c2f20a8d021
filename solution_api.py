"""
Solution Maker API — Main Application
FastAPI application that lists topic-wise MCQs and generates AI answers and
step-by-step solutions for them on demand.
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from database.database import engine, Base
from database import models  # noqa: F401  (register tables on Base.metadata)
from routers import questions, solutions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables."""
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Solution Maker API",
    description="Topic-wise MCQ bank with AI-generated answers and solutions",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Routers ───────────────────────────────────────────────────────────────────

app.include_router(questions.router)          # /api/questions, /api/topics, /api/parts, /api/slots
app.include_router(solutions.router)          # /api/generate-solution


@app.get("/")
def root():
    return {
        "name": "Solution Maker API",
        "version": "1.0.0",
        "endpoints": {
            "docs": "/docs",
            "questions": "/api/questions",
            "generate_solution": "/api/generate-solution",
        },
    }


@app.get("/health")
def health_check():
    return {"status": "healthy", "service": "solution-maker-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
