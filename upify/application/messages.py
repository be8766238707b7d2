"""Customer-facing texts for the configured locale (English)."""

CATEGORY_REQUIRED = "Choose a category first."
SERVICE_REQUIRED = "Choose a service first."
LINK_REQUIRED = "Enter the link."
ACKNOWLEDGEMENT_REQUIRED = "You must confirm you read the service description."
QUANTITY_NOT_WHOLE = "Quantity must be a whole number (0 or more)."
QUANTITY_NOT_POSITIVE = "Quantity must be greater than 0."
QUANTITY_BELOW_MIN = "Minimum quantity for this service is {min}."
QUANTITY_ABOVE_MAX = "Maximum quantity for this service is {max}."

ORDER_IN_PROGRESS = "Creating the order..."
ORDER_ALREADY_IN_FLIGHT = "An order is already being submitted."
API_BASE_MISSING = "API base not configured (UPIFY_API_BASE)."
SIGN_IN_REQUIRED = "You must sign in first."
SIGN_IN_FAILED = "Sign-in failed. Check your email and password."
ORDER_CREATED = "Order created successfully."
ORDER_FAILED = "Failed to create the order. Check the link, quantity and service."
NETWORK_ERROR = "Network error: {error}"
UNKNOWN_ERROR = "Unknown error"

CATEGORY_SELECTED = "Category selected: {category}"
SERVICE_SELECTED = "Service selected: #{service_id}"

CATALOG_LOAD_FAILED = (
    "Failed to load services from the database. "
    "Check the column names in the services table.\n{error}"
)
NO_DESCRIPTION = "No description for this service."
