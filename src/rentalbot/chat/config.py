"""Chat configuration constants.

Centralizes caps, delays and currency settings used by the chat core.
"""

# Record caps applied before formatting
MAX_CARS = 10
MAX_BOOKINGS = 10
MAX_PRICING = 5

# Conversation entries forwarded to the chatbot backend
HISTORY_LIMIT = 10

# Cosmetic latency for replies that need no backend call (seconds)
HELP_REPLY_DELAY = 0.5
FALLBACK_REPLY_DELAY = 0.8

CURRENCY_SYMBOL = "₹"
PRICE_FRACTION_DIGITS = 3

GREETING = "Hi! Welcome to our car rental service. How can I help you today?"
