# File: const.py
"""Constants for the Household Dashboard integration.

This file centralizes configuration keys, defaults, backend field names,
API paths, service names, translation keys and platform identifiers for
consistency across the integration.
"""

import logging

import homeassistant.util.dt as dt_util
from homeassistant.const import Platform

from .utils import dt_utils


def set_default_timezone(hass):
    """Set the default timezone based on the Home Assistant configuration."""
    global DEFAULT_TIME_ZONE
    DEFAULT_TIME_ZONE = dt_util.get_time_zone(hass.config.time_zone)
    if DEFAULT_TIME_ZONE is not None:
        dt_utils.set_default_timezone(DEFAULT_TIME_ZONE)


# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
HOUSEHOLD_TITLE = "Household Dashboard"

# Integration Domain
DOMAIN = "household_dashboard"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.BUTTON,
    Platform.CALENDAR,
    Platform.SENSOR,
]

# Coordinators (keys in hass.data[DOMAIN][entry_id])
COORDINATOR = "coordinator"
COORDINATOR_FAMILY = "family_coordinator"
COORDINATOR_UPCOMING = "upcoming_coordinator"
COORDINATOR_HEALTH = "health_coordinator"
COORDINATOR_SUFFIX = "_coordinator"
API_CLIENT = "api_client"

# Default timezone: initially None, to be set once hass is available.
DEFAULT_TIME_ZONE = None

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_BASE_URL = "base_url"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_BILL_URGENCY_DAYS = "bill_urgency_days"
CONF_CHORE_URGENCY_DAYS = "chore_urgency_days"
CONF_MEDICAL_URGENCY_DAYS = "medical_urgency_days"
CONF_UPCOMING_EVENTS_LIMIT = "upcoming_events_limit"

CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_UPDATE_INTERVAL = 5  # minutes
DEFAULT_FAMILY_POLL_SECONDS = 30
DEFAULT_UPCOMING_POLL_SECONDS = 60
DEFAULT_HEALTH_POLL_SECONDS = 60
DEFAULT_REQUEST_TIMEOUT = 10  # seconds
DEFAULT_BILL_URGENCY_DAYS = 3
DEFAULT_CHORE_URGENCY_DAYS = 3
DEFAULT_MEDICAL_URGENCY_DAYS = 2
DEFAULT_UPCOMING_EVENTS_LIMIT = 5
DEFAULT_DUE_HORIZON_DAYS = 7
DEFAULT_REFILL_HORIZON_DAYS = 7
DEFAULT_SHOPPING_CATEGORY = "other"
DEFAULT_SHOPPING_QUANTITY = 1

MIN_UPDATE_INTERVAL = 1
MAX_UPDATE_INTERVAL = 1440
MAX_URGENCY_DAYS = 30
MAX_UPCOMING_EVENTS_LIMIT = 50

# ------------------------------------------------------------------------------------------------
# Backend API Paths
# ------------------------------------------------------------------------------------------------
API_PATH_HEALTH = "/api/health"
API_PATH_FAMILY = "/api/family"
API_PATH_FAMILY_DASHBOARD = "/api/family/dashboard"
API_PATH_CALENDAR_UPCOMING = "/api/calendar/upcoming"
API_PATH_CALENDAR_EVENTS = "/api/calendar/events"
API_PATH_QUICK_ACTIONS = "/api/quickactions"
API_PATH_QUICK_ACTION_EXECUTE = "/api/quickactions/{action_id}/execute"
API_PATH_ANNOUNCEMENT_TRIGGER = "/api/announcements/trigger"
API_PATH_BILLS = "/api/bills"
API_PATH_BILL_PAY = "/api/bills/{bill_id}/pay"
API_PATH_CHORES = "/api/chores"
API_PATH_CHORE_COMPLETE = "/api/chores/{chore_id}/complete"
API_PATH_MEAL_PLANS = "/api/meals/plans"
API_PATH_MEAL_GENERATE = "/api/meals/generate"
API_PATH_MEAL_APPLY = "/api/meals/apply-plan"
API_PATH_MEDICAL_APPOINTMENTS = "/api/medical/appointments"
API_PATH_MEDICATIONS = "/api/medications"
API_PATH_MEDICAL_RECORDS = "/api/medical/records"
API_PATH_SHOPPING_LIST = "/api/shopping/list"
API_PATH_SHOPPING_ITEMS = "/api/shopping/items"
API_PATH_SHOPPING_ITEM = "/api/shopping/items/{item_id}"
API_PATH_SHOPPING_CLEAR_CHECKED = "/api/shopping/clear-checked"

# Wrapper keys used by collection endpoints that return {key: [...]}
API_KEY_MEMBERS = "members"
API_KEY_EVENTS = "events"
API_KEY_BILLS = "bills"
API_KEY_CHORES = "chores"
API_KEY_PLANS = "plans"
API_KEY_APPOINTMENTS = "appointments"
API_KEY_MEDICATIONS = "medications"
API_KEY_RECORDS = "records"
API_KEY_ITEMS = "items"
API_KEY_ITEM = "item"
API_KEY_ACTIONS = "actions"

# ------------------------------------------------------------------------------------------------
# Coordinator Data Keys (household snapshot)
# ------------------------------------------------------------------------------------------------
DATA_BILLS = "bills"
DATA_CHORES = "chores"
DATA_FAMILY_MEMBERS = "family_members"
DATA_MEAL_PLANS = "meal_plans"
DATA_APPOINTMENTS = "appointments"
DATA_MEDICATIONS = "medications"
DATA_MEDICAL_RECORDS = "medical_records"
DATA_SHOPPING_ITEMS = "shopping_items"
DATA_QUICK_ACTIONS = "quick_actions"
DATA_MEAL_PERIOD = "meal_period"
DATA_FETCHED_AT = "fetched_at"

# ------------------------------------------------------------------------------------------------
# Normalized Record Fields
# ------------------------------------------------------------------------------------------------
FIELD_ID = "id"
FIELD_NAME = "name"
FIELD_TITLE = "title"
FIELD_AMOUNT = "amount"
FIELD_DUE_DATE = "due_date"
FIELD_CATEGORY = "category"
FIELD_STATUS = "status"
FIELD_IS_RECURRING = "is_recurring"
FIELD_AUTOPAY = "autopay"
FIELD_PAID_AT = "paid_at"
FIELD_ASSIGNED_TO = "assigned_to"
FIELD_FREQUENCY = "frequency"
FIELD_COMPLETED_AT = "completed_at"
FIELD_POINTS = "points"
FIELD_NICKNAME = "nickname"
FIELD_ROLE = "role"
FIELD_AGE = "age"
FIELD_AVATAR = "avatar"
FIELD_COLOR = "color"
FIELD_MEMBER = "member"
FIELD_PRESENCE = "presence"
FIELD_IS_HOME = "is_home"
FIELD_LAST_SEEN = "last_seen"
FIELD_CURRENT_ZONE = "current_zone"
FIELD_PENDING_CHORES = "pending_chores"
FIELD_UPCOMING_EVENTS = "upcoming_events"
FIELD_NEXT_APPOINTMENT = "next_appointment"
FIELD_PURPOSE = "purpose"
FIELD_DATE_TIME = "date_time"
FIELD_START = "start"
FIELD_END = "end"
FIELD_ALL_DAY = "all_day"
FIELD_LOCATION = "location"
FIELD_DESCRIPTION = "description"
FIELD_TYPE = "type"
FIELD_FAMILY_MEMBER_IDS = "family_member_ids"
FIELD_DATE = "date"
FIELD_MEAL_TYPE = "meal_type"
FIELD_RECIPE = "recipe"
FIELD_SERVINGS = "servings"
FIELD_PREP_TIME = "prep_time"
FIELD_COOK_TIME = "cook_time"
FIELD_INGREDIENTS = "ingredients"
FIELD_NOTES = "notes"
FIELD_PATIENT_NAME = "patient_name"
FIELD_PROVIDER = "provider"
FIELD_SPECIALTY = "specialty"
FIELD_TIME = "time"
FIELD_DOSAGE = "dosage"
FIELD_TAKEN_BY = "taken_by"
FIELD_NEXT_REFILL_DATE = "next_refill_date"
FIELD_PRESCRIBER = "prescriber"
FIELD_SUMMARY = "summary"
FIELD_QUANTITY = "quantity"
FIELD_UNIT = "unit"
FIELD_CHECKED = "checked"
FIELD_ADDED_BY = "added_by"
FIELD_SOURCE = "source"
FIELD_PRIORITY = "priority"
FIELD_ICON = "icon"
FIELD_UPTIME = "uptime"
FIELD_MODULES = "modules"
FIELD_MESSAGE = "message"

# ------------------------------------------------------------------------------------------------
# Raw Backend Statuses and Enumerations
# ------------------------------------------------------------------------------------------------
STATUS_PENDING = "pending"
STATUS_PAID = "paid"
STATUS_COMPLETED = "completed"
STATUS_OVERDUE = "overdue"
STATUS_CANCELLED = "cancelled"
STATUS_UPCOMING = "upcoming"

HEALTH_HEALTHY = "healthy"
HEALTH_DEGRADED = "degraded"
HEALTH_UNHEALTHY = "unhealthy"
HEALTH_STATES = [HEALTH_HEALTHY, HEALTH_DEGRADED, HEALTH_UNHEALTHY]

BILL_CATEGORIES = [
    "utilities",
    "housing",
    "insurance",
    "subscriptions",
    "medical",
    "other",
]

CHORE_FREQUENCIES = ["daily", "weekly", "monthly"]

# Chore board columns
CHORE_COLUMN_OVERDUE = "overdue"
CHORE_COLUMN_PENDING = "pending"
CHORE_COLUMN_COMPLETED = "completed"
CHORE_COLUMNS = [CHORE_COLUMN_OVERDUE, CHORE_COLUMN_PENDING, CHORE_COLUMN_COMPLETED]

EVENT_TYPES = ["appointment", "school", "work", "family", "reminder", "other"]

MEAL_TYPE_ORDER = ["breakfast", "lunch", "dinner", "snack"]

APPOINTMENT_TYPES = ["checkup", "specialist", "therapy", "dental", "vision", "other"]

RECORD_TYPE_LAB_RESULT = "lab_result"
RECORD_TYPES = [RECORD_TYPE_LAB_RESULT, "imaging", "diagnosis", "note", "referral"]

SHOPPING_CATEGORY_ORDER = [
    "produce",
    "dairy",
    "meat",
    "bakery",
    "frozen",
    "pantry",
    "beverages",
    "snacks",
    "household",
    "personal",
    "other",
]

SHOPPING_SOURCE_MANUAL = "manual"

ANNOUNCEMENT_TYPES = [
    "morning-briefing",
    "dinner-time",
    "bedtime-start",
    "family-meeting",
]

# Quick actions shown when the backend has none configured or is unreachable
DEFAULT_QUICK_ACTIONS = [
    {
        FIELD_ID: "morning-briefing",
        FIELD_NAME: "Morning Briefing",
        FIELD_ICON: "sun",
        FIELD_CATEGORY: "announcements",
    },
    {
        FIELD_ID: "dinner-time",
        FIELD_NAME: "Dinner Time",
        FIELD_ICON: "utensils",
        FIELD_CATEGORY: "announcements",
    },
    {
        FIELD_ID: "bedtime-start",
        FIELD_NAME: "Bedtime Routine",
        FIELD_ICON: "moon",
        FIELD_CATEGORY: "announcements",
    },
    {
        FIELD_ID: "family-meeting",
        FIELD_NAME: "Family Meeting",
        FIELD_ICON: "users",
        FIELD_CATEGORY: "announcements",
    },
]
QUICK_ACTION_CATEGORY_ANNOUNCEMENTS = "announcements"

# Backend icon names → Material Design Icons
QUICK_ACTION_ICON_MAP = {
    "sun": "mdi:weather-sunny",
    "moon": "mdi:weather-night",
    "utensils": "mdi:silverware-fork-knife",
    "users": "mdi:account-group",
}
DEFAULT_QUICK_ACTION_ICON = "mdi:weather-sunny"

# Health fallback used when the backend cannot be reached
HEALTH_FALLBACK = {
    FIELD_STATUS: HEALTH_UNHEALTHY,
    FIELD_UPTIME: 0,
    FIELD_MODULES: {},
}

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_PAY_BILL = "pay_bill"
SERVICE_COMPLETE_CHORE = "complete_chore"
SERVICE_ADD_SHOPPING_ITEM = "add_shopping_item"
SERVICE_TOGGLE_SHOPPING_ITEM = "toggle_shopping_item"
SERVICE_REMOVE_SHOPPING_ITEM = "remove_shopping_item"
SERVICE_CLEAR_CHECKED_SHOPPING_ITEMS = "clear_checked_shopping_items"
SERVICE_GENERATE_MEAL_PLAN = "generate_meal_plan"
SERVICE_TRIGGER_ANNOUNCEMENT = "trigger_announcement"
SERVICE_EXECUTE_QUICK_ACTION = "execute_quick_action"
SERVICE_REFRESH = "refresh"
SERVICE_GET_PERIOD_VIEW = "get_period_view"

SERVICE_FIELD_BILL_ID = "bill_id"
SERVICE_FIELD_CHORE_ID = "chore_id"
SERVICE_FIELD_ITEM_ID = "item_id"
SERVICE_FIELD_ACTION_ID = "action_id"
SERVICE_FIELD_NAME = "name"
SERVICE_FIELD_CATEGORY = "category"
SERVICE_FIELD_QUANTITY = "quantity"
SERVICE_FIELD_REFERENCE_DATE = "reference_date"
SERVICE_FIELD_DIETARY = "dietary"
SERVICE_FIELD_ALLERGIES = "allergies"
SERVICE_FIELD_ANNOUNCEMENT_TYPE = "type"
SERVICE_FIELD_KIND = "kind"
SERVICE_FIELD_DIRECTION = "direction"
SERVICE_FIELD_SOURCE = "source"

PERIOD_VIEW_SOURCE_EVENTS = "events"
PERIOD_VIEW_SOURCE_MEALS = "meals"
PERIOD_VIEW_SOURCES = [PERIOD_VIEW_SOURCE_EVENTS, PERIOD_VIEW_SOURCE_MEALS]

# ------------------------------------------------------------------------------------------------
# Entity Attributes
# ------------------------------------------------------------------------------------------------
ATTR_ALLERGIES = "allergies"
ATTR_APPOINTMENTS = "appointments"
ATTR_BILLS = "bills"
ATTR_BY_CATEGORY = "by_category"
ATTR_CATEGORIES = "categories"
ATTR_CHECKED_COUNT = "checked_count"
ATTR_COLUMNS = "columns"
ATTR_COMPLETED = "completed"
ATTR_DUE_WITHIN_WEEK = "due_within_week"
ATTR_EVENTS = "events"
ATTR_LAB_RESULTS = "lab_results"
ATTR_LABEL = "label"
ATTR_MEALS = "meals"
ATTR_MEMBERS = "members"
ATTR_MODULES = "modules"
ATTR_OVERDUE_COUNT = "overdue_count"
ATTR_POINTS = "points"
ATTR_REFILLS_NEEDED = "refills_needed"
ATTR_TOTAL = "total"
ATTR_TOTAL_PAID = "total_paid"
ATTR_UPCOMING = "upcoming"
ATTR_UPTIME_HOURS = "uptime_hours"

# ------------------------------------------------------------------------------------------------
# Translation Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_SENSOR_BILLS_DUE = "bills_due"
TRANS_KEY_SENSOR_BILLS_OVERDUE = "bills_overdue"
TRANS_KEY_SENSOR_CHORES_PENDING = "chores_pending"
TRANS_KEY_SENSOR_MEMBER_CHORES = "member_chores"
TRANS_KEY_SENSOR_SHOPPING_LIST = "shopping_list"
TRANS_KEY_SENSOR_APPOINTMENTS = "upcoming_appointments"
TRANS_KEY_SENSOR_MEALS_TODAY = "meals_today"
TRANS_KEY_SENSOR_UPCOMING_EVENTS = "upcoming_events"
TRANS_KEY_SENSOR_SYSTEM_HEALTH = "system_health"
TRANS_KEY_SENSOR_MEMBERS_HOME = "members_home"
TRANS_KEY_CALENDAR_EVENTS = "household_events"
TRANS_KEY_CALENDAR_MEALS = "meal_plan"
TRANS_KEY_BUTTON_QUICK_ACTION = "quick_action"

TRANS_KEY_ERROR_CANNOT_CONNECT = "cannot_connect"
TRANS_KEY_ERROR_INVALID_URL = "invalid_url"
TRANS_KEY_ABORT_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ABORT_ALREADY_CONFIGURED = "already_configured"
