"""
utils/constants.py

Purpose: Centralized static content

- Profession, experience and user-type catalogues
- User-facing notification messages
- Payment page credit packs
- Demo-mode workers and accounts

(Prevents hardcoding across the codebase)
"""

# ============================================================
# CATALOGUES
# ============================================================

PROFESSIONS = {
    "mason": "Mason (Mistri)",
    "electrician": "Electrician",
    "plumber": "Plumber",
    "painter": "Painter",
    "carpenter": "Carpenter",
    "welder": "Welder",
    "driver": "Driver",
    "helper": "Helper",
    "cleaner": "Cleaner",
    "other": "Other",
}

EXPERIENCE_BRACKETS = {
    "0-1": "0-1 Years",
    "1-3": "1-3 Years",
    "3-5": "3-5 Years",
    "5-10": "5-10 Years",
    "10+": "10+ Years",
}

USER_TYPES = {
    "worker": "Individual Worker",
    "professional": "Professional Contractor",
    "customer": "Customer",
}


def get_profession_name(code: str) -> str:
    """Display name for a profession code; unknown codes display as-is."""
    return PROFESSIONS.get(code, code)


def get_user_type_display(user_type: str) -> str:
    """Display name for a user type; unknown types display as-is."""
    return USER_TYPES.get(user_type, user_type)


# ============================================================
# NOTIFICATIONS
# ============================================================

MSG_INVALID_MOBILE = "Please enter a valid 10-digit Indian mobile number"
MSG_ALREADY_REGISTERED = "User with this mobile number already exists. Please login."
MSG_PROFESSION_REQUIRED = "Please select your profession"
MSG_ADDRESS_REQUIRED = "Please enter your address"
MSG_AREA_REQUIRED = "Please enter your area/location"
MSG_ACCOUNT_CREATED = "🎉 Account created successfully!"
MSG_ACCOUNT_CREATED_DEMO = "🎉 Account created (demo mode)"
MSG_OTP_SENT = "OTP sent to {mobile}"
MSG_OTP_SENT_DEMO = "Demo: OTP would be sent to {mobile}"
MSG_NO_PENDING_OTP = "No OTP sent. Please send OTP first."
MSG_INVALID_OTP = "Invalid OTP"
MSG_CAPTCHA_FAILED = "Human verification failed. Please try again."
MSG_USER_NOT_FOUND = "User not found. Please register first."
MSG_WELCOME_BACK = "Welcome back, {name}!"
MSG_LOGGED_OUT = "Logged out successfully"
MSG_PROFILE_UPDATED = "Profile updated successfully"
MSG_PROFESSIONAL_REQUIRED = "Professional account required"
MSG_WORKER_ADDED = "Worker added successfully"
MSG_WORKER_UPDATED = "Worker updated successfully"
MSG_WORKER_DELETED = "Worker deleted successfully"
MSG_WORKER_NOT_FOUND = "Worker not found"
MSG_PICTURE_UPLOADED = "Profile picture updated"
MSG_DEMO_LOGIN = "Demo login as {user_type}"


# ============================================================
# PAYMENT (mock)
# ============================================================

CREDIT_PACKS = [
    {"workers": 10, "price": 100},
    {"workers": 25, "price": 250},
    {"workers": 50, "price": 500},
]


# ============================================================
# DEMO MODE
# ============================================================

DEMO_WORKERS = [
    {
        "id": "w1",
        "fullName": "Rajesh Kumar",
        "profession": "electrician",
        "area": "Mumbai",
        "experience": "5-10",
        "dailyRate": 1000,
        "mobile": "9876543210",
        "rating": 4.5,
        "isVerified": True,
        "isActive": True,
        "skills": "Wiring, Repair, Installation",
        "jobsCompleted": 25,
    },
    {
        "id": "w2",
        "fullName": "Suresh Patel",
        "profession": "plumber",
        "area": "Delhi",
        "experience": "3-5",
        "dailyRate": 800,
        "mobile": "9876543211",
        "rating": 4.2,
        "isVerified": False,
        "isActive": True,
        "skills": "Pipe fitting, Repair",
        "jobsCompleted": 15,
    },
    {
        "id": "w3",
        "fullName": "Mohan Singh",
        "profession": "mason",
        "area": "Bangalore",
        "experience": "10+",
        "dailyRate": 1200,
        "mobile": "9876543212",
        "rating": 4.7,
        "isVerified": True,
        "isActive": True,
        "skills": "Construction, Tile work",
        "jobsCompleted": 40,
    },
]

DEMO_ACCOUNTS = {
    "worker": {
        "id": "demo_worker_001",
        "fullName": "Rajesh Kumar",
        "mobile": "9876543210",
        "userType": "worker",
        "profession": "electrician",
        "experience": "5-10",
        "dailyRate": 1000,
        "rating": 4.5,
        "jobsCompleted": 25,
        "area": "Mumbai",
        "address": "123, Andheri East",
        "skills": "Wiring, Repair, Installation",
    },
    "customer": {
        "id": "demo_customer_001",
        "fullName": "Amit Sharma",
        "mobile": "9876543211",
        "userType": "customer",
        "area": "Delhi",
    },
    "professional": {
        "id": "demo_prof_001",
        "fullName": "Construction Company",
        "mobile": "9876543212",
        "userType": "professional",
        "area": "Bangalore",
        "workersCount": 5,
    },
}

# Landing page per user type after login/registration
HOME_PAGE_BY_USER_TYPE = {
    "worker": "worker-dashboard",
    "professional": "professional-dashboard",
    "customer": "find-workers",
}
