"""
Database Schema Definitions.

Provides SQLite schema for users and generated reports.
"""

# Users table schema
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    phone TEXT,
    department TEXT NOT NULL,
    position TEXT NOT NULL,
    salary REAL NOT NULL CHECK (salary >= 0),
    hire_date TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

CREATE_USERS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_users_name ON users(name);
CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);
"""

# Report history table schema
CREATE_REPORTS_TABLE = """
CREATE TABLE IF NOT EXISTS reports (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    report_type TEXT NOT NULL,
    generated_by TEXT,
    file_path TEXT NOT NULL,
    created_at TEXT NOT NULL
)
"""

CREATE_REPORTS_INDEXES = """
CREATE INDEX IF NOT EXISTS idx_reports_created_at ON reports(created_at);
CREATE INDEX IF NOT EXISTS idx_reports_report_type ON reports(report_type);
"""

# All initialization SQL
INIT_DATABASE_SQL = [
    CREATE_USERS_TABLE,
    CREATE_USERS_INDEXES,
    CREATE_REPORTS_TABLE,
    CREATE_REPORTS_INDEXES,
]

# Sample employees inserted on first start (INSERT OR IGNORE keyed on email)
SEED_USERS_SQL = """
INSERT OR IGNORE INTO users (
    name, email, phone, department, position, salary, hire_date, created_at
) VALUES (
    :name, :email, :phone, :department, :position, :salary, :hire_date, :created_at
)
"""

SAMPLE_USERS = [
    {
        "name": "John Doe",
        "email": "john.doe@company.com",
        "phone": "+1-555-0101",
        "department": "Engineering",
        "position": "Senior Developer",
        "salary": 85000,
        "hire_date": "2022-01-15",
    },
    {
        "name": "Jane Smith",
        "email": "jane.smith@company.com",
        "phone": "+1-555-0102",
        "department": "Marketing",
        "position": "Marketing Manager",
        "salary": 75000,
        "hire_date": "2021-06-20",
    },
    {
        "name": "Mike Johnson",
        "email": "mike.johnson@company.com",
        "phone": "+1-555-0103",
        "department": "Sales",
        "position": "Sales Representative",
        "salary": 65000,
        "hire_date": "2023-03-10",
    },
    {
        "name": "Sarah Wilson",
        "email": "sarah.wilson@company.com",
        "phone": "+1-555-0104",
        "department": "HR",
        "position": "HR Specialist",
        "salary": 60000,
        "hire_date": "2022-08-05",
    },
    {
        "name": "David Brown",
        "email": "david.brown@company.com",
        "phone": "+1-555-0105",
        "department": "Finance",
        "position": "Financial Analyst",
        "salary": 70000,
        "hire_date": "2021-11-12",
    },
]
