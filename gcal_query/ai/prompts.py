"""
Prompt templates for the resolver and narrator model calls.
"""

from __future__ import annotations

from datetime import datetime

DATE_RANGE_SYSTEM = (
  "You are a helpful assistant that determines date ranges for calendar queries. "
  "Return only valid JSON with ISO date strings."
)

TIME_SYSTEM = (
  "You are a time format converter. Return ONLY valid JSON with time in HH:MM format "
  "and nothing else. No explanations or other text."
)

SUMMARY_SYSTEM = (
  "You are a helpful calendar assistant that provides clear, concise summaries of calendar "
  "events. Focus on making the information easily digestible and highlighting the most "
  "relevant details. Keep responses brief and under 100 words."
)


def date_range_messages(query: str, now: datetime, timezone: str) -> list[dict[str, str]]:
  today = now.isoformat()
  prompt = (
    f'Given the query "{query}", today\'s date is {today}, and it is a {now.strftime("%A")}, '
    "determine the start and end dates to search for calendar events.\n"
    "Return ONLY a JSON object with two ISO date strings: startDate and endDate.\n"
    'Example: {"startDate": "2024-03-15T00:00:00-07:00", '
    '"endDate": "2024-03-17T23:59:59-07:00"}\n'
    f"Today's date is {today}. startDate must be the start of a day and endDate the end of "
    f"a day, both in the {timezone} timezone, with the UTC offset included.\n"
    "DO NOT INCLUDE ANY OTHER TEXT BESIDES VALID JSON"
  )
  return [
    {"role": "system", "content": DATE_RANGE_SYSTEM},
    {"role": "user", "content": prompt},
  ]


def time_messages(text: str) -> list[dict[str, str]]:
  prompt = (
    f'Convert the time "{text}" to 24-hour format (HH:MM).\n'
    'IMPORTANT: Return ONLY a JSON object with a single field "time" in HH:MM format.\n'
    'Example: {"time": "14:30"}\n'
    "DO NOT include any explanation or thinking process.\n"
    "DO NOT include any other text besides the JSON object."
  )
  return [
    {"role": "system", "content": TIME_SYSTEM},
    {"role": "user", "content": prompt},
  ]


def summary_messages(
  query: str,
  range_start: str,
  range_end: str,
  events_context: str,
  today: str,
) -> list[dict[str, str]]:
  prompt = (
    f'I searched the calendar for "{query}" and found these events between {range_start} '
    f"and {range_end}:\n"
    f"{events_context}\n\n"
    "Please provide a natural language summary of these events. Focus on:\n"
    "1. The most important or upcoming events prioritizing the time period of the query\n"
    "2. Any patterns or clusters of events\n"
    "3. Highlight any events with specific locations or many attendees\n"
    "4. Mention the total number of events found\n"
    "5. Do not mention events unless relevant to the query\n"
    f"6. Today's date is {today}\n\n"
    "Format the response in a friendly, conversational way. "
    "Keep the response concise and under 200 words."
  )
  return [
    {"role": "system", "content": SUMMARY_SYSTEM},
    {"role": "user", "content": prompt},
  ]
