# config.py
import os

from dotenv import load_dotenv

load_dotenv()

# --- 1. SYSTEM CONFIGURATION ---
SEED_PATH = os.getenv("EXPENSO_SEED_PATH", "data/seed.json")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
ITEMS_PER_PAGE = int(os.getenv("EXPENSO_ITEMS_PER_PAGE", "10"))

CURRENCY_SYMBOL = "₹"

# --- 2. TRANSACTION VOCABULARY ---
CREDIT = "credit"
DEBIT = "debit"

DEBIT_CATEGORIES = ['Food', 'Transport', 'Shopping', 'Bills', 'Entertainment', 'Health', 'Others']
CREDIT_SOURCES = ['Salary', 'Freelance', 'Gift', 'Refund', 'Other']
GOAL_CATEGORIES = ['Electronics', 'Travel', 'Car', 'Home', 'Education', 'Health', 'Other']

# Debit category used for ledger entries mirrored from goal investments
GOALS_CATEGORY = "Goals"

# Debit category that asks the user for a free-text name instead
CUSTOM_CATEGORY = "Others"

# --- 3. CHART WINDOWS ---
DAILY_WINDOW_DAYS = 7
WEEKLY_WINDOW_WEEKS = 4
MONTHLY_WINDOW_MONTHS = 4
# Months shown for any year other than the current one
PAST_YEAR_MONTHS = (9, 10, 11, 12)
# Months averaged for the goal savings projection
SAVINGS_WINDOW_MONTHS = 3

# --- 4. UI STYLING & COLORS ---
PALETTE = [
    '#6366F1',  # indigo
    '#10B981',  # emerald
    '#F59E0B',  # amber
    '#EF4444',  # red
    '#3B82F6',  # blue
    '#8B5CF6',  # violet
    '#EC4899',  # pink
    '#14B8A6',  # teal
]

# Colors pinned per category name so a chart keeps its colors as categories come and go
CATEGORY_COLORS = {
    'Food': '#6366F1',
    'Transport': '#10B981',
    'Shopping': '#F59E0B',
    'Bills': '#EF4444',
    'Entertainment': '#3B82F6',
    'Health': '#8B5CF6',
    'Goals': '#EC4899',
    'Others': '#14B8A6',
}

COLORS = {
    'income': '#10b981',
    'expense': '#ef4444',
}
