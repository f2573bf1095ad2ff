from sqlalchemy import inspect

from database.db import Base, engine

# every model must be imported so Base.metadata knows its table
from models import assessments, attempts, courses, guardians, periods, questions, students, subjects, topics  # noqa: F401


def create_tables(bind=engine):
    Base.metadata.create_all(bind=bind)
    return sorted(inspect(bind).get_table_names())


if __name__ == "__main__":
    tables = create_tables()
    print(f"✅ {len(tables)} tables ready: {', '.join(tables)}")
