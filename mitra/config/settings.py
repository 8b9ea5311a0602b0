"""Pydantic settings and app constants."""
from pydantic import BaseModel, Field

CITY_NAME = "Mangaluru"
BOT_NAME = "Mangaluru Mitra"

WELCOME_MESSAGE = (
    "Namaskara! I'm Mangaluru Mitra. Ask me about local food, famous places, "
    "or even some Tulu phrases!"
)

# Suggestion chips shown on a fresh conversation
SUGGESTIONS = [
    "Upcoming Events",
    "Plan a food tour for me",
    "Teach me some Tulu",
]

CITY_SUMMARY = (
    "Mangaluru is a coastal port city in Karnataka, set between the Arabian Sea "
    "and the Western Ghats. It is known for its beaches like Panambur and Tannirbhavi, "
    "old temples and churches such as Kadri Manjunatha Temple and St. Aloysius Chapel, "
    "and a fiery coastal cuisine built on coconut, seafood and ghee. Locals speak Tulu, "
    "Konkani, Beary and Kannada, and the city comes alive with Kambala buffalo races "
    "and temple festivals through the cooler months."
)

CHITCHAT_RESPONSES = [
    "I'm doing great, thank you! Ready to explore Mangaluru?",
    "Namaskara! I'm here to help you discover the best of Mangaluru. What's on your mind?",
    "I'm a bot, so I'm always doing well! What can I tell you about the beautiful city of Mangaluru?",
]

NARRATION_FALLBACK = (
    "Sorry, I couldn't put the details together right now. Please try asking again in a moment."
)
GENERAL_KNOWLEDGE_FALLBACK = (
    "Sorry, I don't have details on that right now. "
    "You could try asking me about Panambur Beach or Ideal Ice Cream!"
)
FOOD_TOUR_UNAVAILABLE = "I don't have enough location data to create a tour yet!"
FAVORITES_LOGIN_REQUIRED = "Please log in to see your saved favorites."

MAP_DIRECTIONS_BASE_URL = "https://www.google.com/maps/dir/"

REQUEST_TIMEOUT_SECONDS = 10.0


class Settings(BaseModel):
    gemini_api_key: str = Field(default="", description="Gemini API key for text generation")
    gemini_model: str = Field(default="gemini-1.5-flash-latest", description="Gemini model name")
    openweather_api_key: str = Field(default="", description="OpenWeather API key for live weather")
    google_credentials_path: str = Field(default="", description="Path to Google service account JSON")
    firestore_project_id: str = Field(default="", description="Firestore project holding city data")
    request_timeout_seconds: float = Field(
        default=REQUEST_TIMEOUT_SECONDS, description="Timeout for every outbound call"
    )
    auth_enabled: bool = Field(default=False, description="Show login (Streamlit OIDC) when true")
    log_level: str = Field(default="INFO", description="Root log level")

    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key.strip())

    def weather_configured(self) -> bool:
        return bool(self.openweather_api_key.strip())

    def firestore_configured(self) -> bool:
        return bool(self.google_credentials_path.strip()) and bool(self.firestore_project_id.strip())
