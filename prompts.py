"""Instruction strings sent to the text-generation provider."""

from __future__ import annotations

SYSTEM_PROMPT = """You are an astronomy and space-weather data assistant.
Respond ONLY with valid JSON following the schema given by the user.
No prose, no markdown, no code fences."""

_EVENTS_PROMPT = """Generate exactly 5 major astronomical events from {year} to {end_year}. Return a JSON object with this structure:
{{
  "events": [
    {{
      "date": "YYYY-MM-DD",
      "title": "Event Title",
      "type": "meteor",
      "description": "Brief description",
      "location": "Where visible",
      "peakTime": "Peak viewing time",
      "duration": "Event duration",
      "details": {{
        "phenomenon": "How it occurs",
        "viewingGuide": "How to view",
        "significance": "Why important",
        "relatedEvents": ["Related event 1", "Related event 2"]
      }}
    }}
  ]
}}

Include only these event types: meteor, eclipse, conjunction, transit, occultation.
Keep all text fields under 200 characters.
Focus on major events like meteor showers, eclipses, and planetary conjunctions."""

_EVENT_DETAIL_PROMPT = """Provide detailed information about the astronomical event "{title}" occurring on {date}. Include only factual, accurate information in this JSON format:
{{
  "peakTime": "Specific peak viewing time",
  "duration": "Event duration",
  "details": {{
    "phenomenon": "Detailed scientific explanation of how it occurs",
    "viewingGuide": "Practical viewing instructions including equipment needed and best viewing conditions",
    "significance": "Scientific and historical significance of this event",
    "relatedEvents": ["List of 2-3 related astronomical events"]
  }},
  "additionalInfo": {{
    "equipment": ["List of recommended viewing equipment"],
    "weatherConditions": "Ideal weather conditions for viewing",
    "historicalContext": "Brief historical context or previous notable occurrences",
    "scientificImportance": "Scientific research value or discoveries associated with this type of event"
  }}
}}"""

_WEATHER_INSIGHT_PROMPT = """Generate current weather conditions and atmospheric phenomena for {subject} based on scientific data. Return only a JSON object with this exact structure:
{{
  "temperature": {{
    "average": "string with average temperature",
    "range": "string with temperature range"
  }},
  "atmosphere": {{
    "composition": ["array of strings with main gases"],
    "pressure": "string describing atmospheric pressure"
  }},
  "phenomena": ["array of strings describing weather phenomena"],
  "seasons": "string describing seasonal changes",
  "facts": ["at least 3 interesting weather facts"]
}}
The response MUST include all of the following fields: {required}"""

SPACE_WEATHER_PROMPT = """Generate current real-time space weather conditions. Return a JSON object with this exact structure:
{
  "solarWind": {
    "speed": number (realistic value between 300-800 km/s),
    "timestamp": current UTC timestamp
  },
  "geomagneticData": {
    "kpIndex": number (realistic value between 0-9),
    "timestamp": current UTC timestamp
  },
  "additionalData": {
    "solarFlares": string (current solar flare activity),
    "coronalHoles": string (current coronal hole activity),
    "radiationBelts": string (current radiation belt status)
  }
}

Base the values on typical solar wind speeds (300-800 km/s) and Kp index ranges (0-9).
Use realistic, scientifically accurate values that could be occurring right now."""


def events_prompt(year: int) -> str:
    return _EVENTS_PROMPT.format(year=year, end_year=year + 2)


def event_detail_prompt(title: str, date: str) -> str:
    return _EVENT_DETAIL_PROMPT.format(title=title, date=date)


def weather_insight_prompt(subject: str, required: tuple[str, ...]) -> str:
    return _WEATHER_INSIGHT_PROMPT.format(subject=subject, required=", ".join(required))
