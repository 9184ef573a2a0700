"""
Constant pools and bounds used for generating and validating test data
"""

FIRST_NAMES = (
    "John", "Jane", "Michael", "Sarah", "David", "Emma", "James", "Olivia",
    "Robert", "Sophia", "William", "Isabella", "Daniel", "Mia", "Thomas",
    "Charlotte", "Raj", "Priya", "Liam", "Ava",
)

LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Martinez", "Wilson", "Anderson", "Taylor", "Thomas", "Moore",
    "Jackson", "Patel", "Lee", "Walker", "Hall", "Young",
)

# Values accepted by the storefront's registration country dropdown
COUNTRIES = (
    "India", "United States", "Canada", "Australia", "Israel",
    "New Zealand", "Singapore",
)

CITIES = (
    "New York", "Los Angeles", "Chicago", "Toronto", "Sydney", "Mumbai",
    "Singapore", "Auckland", "Tel Aviv", "Vancouver",
)

MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)

ADDITIONAL_NEEDS = (
    "Breakfast", "Lunch", "Dinner", "Late checkout", "Early checkin",
    "Airport transfer", "Extra pillows", "Parking",
)

EMAIL_DOMAINS = ("gmail.com", "outlook.com", "yahoo.com")

# Password character classes
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SYMBOLS = "!@#$%^&*"

# Generation defaults
PRICE_MIN = 50
PRICE_MAX = 5000
MIN_FUTURE_DAYS = 1
MAX_FUTURE_DAYS = 180
CHECKOUT_WINDOW_DAYS = 30
PASSWORD_MIN_LENGTH = 8
BIRTH_YEAR_MIN = 1950
BIRTH_YEAR_MAX = 2005
BIRTH_DAY_MAX = 28  # valid in every month
ZIPCODE_MIN = 10000
ZIPCODE_MAX = 99999

NAME_MAX_LENGTH = 100

# Test card accepted by the storefront's payment form
TEST_CARD_NUMBER = "4111111111111111"
