AVAILABLE_MESSAGE = "Perfect! The time {date} is available. Shall I confirm your booking?"

ALTERNATIVE_MESSAGE = "The closest available time is: {date}. Shall I confirm your booking at this time?"

OUTSIDE_HOURS_MESSAGE = "Sorry, that time is outside our business hours. Any other date and time?"

WEEKEND_MESSAGE = "Sorry, we don't work on weekends. Please give me another date and time."

SEARCH_EXHAUSTED_MESSAGE = (
    "Sorry, I couldn't find a free slot in the next few days. "
    "Could you suggest a different date?"
)

DECLINED_MESSAGE = "Any other date and time?"

CONFIRMING_MESSAGE = "Great, let's confirm your booking for {friendly} ({date})."

APOLOGY_MESSAGE = (
    "Sorry, something went wrong while checking the calendar. "
    "Please try again in a moment."
)

FALLBACK_MESSAGE = "I'm here to help you book a meeting. What date and time would suit you?"
