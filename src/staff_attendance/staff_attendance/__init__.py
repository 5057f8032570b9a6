"""Staff Attendance package.

Organized by feature modules (staff, linking, attendance, payroll, documents,
bot), each split into dataclass models, Protocol repositories, services and a
thin Flask controller. The Telegram bot runs as its own long-poll process.
"""
