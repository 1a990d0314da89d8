# Prompts for location enrichment.
# - LOCATION_ENRICHMENT_PROMPT is filled with str.format(); literal braces in
#   the JSON schema are doubled.
# - One prompt covers every location of a production so the knowledge
#   service is called once per production.

# =============================================================================
# LOCATION ENRICHMENT PROMPT (all locations of one shoot day)
# =============================================================================
LOCATION_ENRICHMENT_PROMPT = r"""You are helping a film production crew in Australia. I need specific information about multiple locations for a shoot date of {shoot_date}.

LOCATIONS:
{locations}

For EACH location, please search the web and provide accurate, current information. Return a JSON array where each object corresponds to a location in order.

Each object should have these exact keys:
{{
  "nearestHospital": "Name and address of the nearest hospital",
  "nearestFireStation": "Name and address of the nearest fire station",
  "nearestPoliceStation": "Name and address of the nearest police station",
  "nearestEmergencyAfterHours": "Name and address of nearest 24-hour emergency medical facility",
  "sunriseTime": "Sunrise time for {shoot_date} at this location (e.g., '6:42 AM')",
  "sunsetTime": "Sunset time for {shoot_date} at this location (e.g., '7:58 PM')",
  "weatherTemp": "Expected high/low temperature for {shoot_date} (e.g., '28°C / 19°C')",
  "weatherDesc": "Professional weather description including precipitation chance and any warnings",
  "publicTransportInfo": "Concise paragraph on public transport routes connecting to this location",
  "transportDesc": "Brief directions to next location, or 'N/A' if no next location"
}}

Important:
- Return a JSON ARRAY with {count} objects (one per location, in order)
- Use Australian format for times and temperatures
- Be specific with addresses
- Keep descriptions professional and concise
- Return ONLY valid JSON, no markdown formatting"""

LOCATION_LINE = 'Location {position}: "{address}"'
NEXT_LOCATION_SUFFIX = ' (next location: "{next_address}")'
