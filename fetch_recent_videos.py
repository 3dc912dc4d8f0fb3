#!/usr/bin/env python3
"""
Fetch recent YouTube watch history (manual workflow).

Prints a prompt to paste into Gemini, which has access to the user's
watch history. The JSON it returns is saved by hand to recent-videos.json.

Usage:
    python fetch_recent_videos.py
"""

RULE_WIDTH = 70

GEMINI_PROMPT = """Using your access to my YouTube watch history, please provide my last 50 watched videos.

For each video, provide:
- Video title
- Video URL
- Channel name
- Brief description/topic

Filter out any political content (politics, elections, government, etc.)

Format as a JSON array:
[
  {
    "title": "Video Title",
    "url": "https://www.youtube.com/watch?v=...",
    "channel": "Channel Name",
    "description": "Brief description"
  },
  ...
]

Only include videos related to:
- Technology
- AI/Machine Learning
- Programming
- Software Development
- Creative Tools
- Science
- Education"""

NEXT_STEPS = [
    "Copy the prompt above",
    "Go to https://gemini.google.com",
    "Paste and submit",
    "Copy the JSON response",
    "Save to: recent-videos.json",
]


def main():
    print("YouTube Recent Watch History Fetcher\n")
    print("=" * RULE_WIDTH)
    print("\nPROMPT FOR GEMINI PERSONAL INTELLIGENCE:\n")
    print("-" * RULE_WIDTH)
    print(GEMINI_PROMPT)
    print("\n" + "-" * RULE_WIDTH)
    print("\nNEXT STEPS:\n")
    for i, step in enumerate(NEXT_STEPS, 1):
        print(f"{i}. {step}")
    print()
    print("=" * RULE_WIDTH)


if __name__ == "__main__":
    main()
