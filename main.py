from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from dotenv import load_dotenv

from db import Base, engine
import admission.models  # noqa: F401  registers tables on Base.metadata
from admission.routes import router as admission_router

load_dotenv()

logging.basicConfig(level=logging.INFO)
logging.info("App starting with DATABASE_URL")

app = FastAPI(title="TNEA College Directory API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

Base.metadata.create_all(bind=engine)

app.include_router(admission_router, prefix="/api")


@app.get("/", tags=["health"])
def root():
    return {"status": "ok", "service": "tnea-college-directory"}
