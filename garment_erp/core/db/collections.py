# Collection names shared by Beanie documents and raw Motor access.
USERS = "users"
PRODUCTION_LIST = "production_list"
LINES = "lines"
LINE_ASSIGNMENTS = "line_assignments"
TARGETS = "targets"
DAILY_PRODUCTION_REPORTS = "daily_production_reports"
CASHBOOK_ENTRIES = "cashbook_entries"
DAILY_SALARIES = "daily_salaries"
MONTHLY_EXPENSES = "monthly_expenses"
SHIPMENTS = "shipments"
