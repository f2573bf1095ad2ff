from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# ✅ middlewares
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ routers
from routers import (
    admin, courses, evaluations, grades, guardians,
    questions, quizzes, students, subjects, teachers,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS (Next.js front end)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ request latency (X-Latency-Ms header + access log)
app.add_middleware(TimingMiddleware)

# ✅ global error handlers (one JSON error format)
add_error_handlers(app)

# ✅ /v1 routers
app.include_router(courses.router,      prefix="/v1")
app.include_router(students.router,     prefix="/v1")
app.include_router(grades.router,       prefix="/v1")
app.include_router(guardians.router,    prefix="/v1")
app.include_router(subjects.router,     prefix="/v1")
app.include_router(quizzes.router,      prefix="/v1")
app.include_router(evaluations.router,  prefix="/v1")
app.include_router(questions.router,    prefix="/v1")
app.include_router(teachers.router,     prefix="/v1")
app.include_router(admin.router,        prefix="/v1")

# ✅ health check
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}

# ✅ root
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - calificaciones y seguimiento académico"}
