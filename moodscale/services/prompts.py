"""Prompt templates sent to the AI gateway."""
from typing import List, Optional, Sequence

from moodscale.models.music import PlaylistTrack
from moodscale.services.ai_service import MOOD_LABELS

PLAYLIST_PROMPT_TRACKS = 30


def mood_insight_prompt(mood: int, note: Optional[str] = None) -> str:
    with_note = f' with the note: "{note}"' if note else ""
    return (
        f'Provide a brief, encouraging insight for someone who just recorded a '
        f'"{MOOD_LABELS[mood]}" mood{with_note}. Keep it under 50 words and be supportive.'
    )


def mood_prediction_prompt(features: dict, title: str, artist: str) -> str:
    return f"""Based on these music features, predict the mood this song might evoke (one word):
    Energy: {features["energy"]:.2f}
    Happiness: {features["valence"]:.2f}
    Danceability: {features["danceability"]:.2f}
    Tempo: {features["tempo"]:.0f} BPM
    Title: {title}
    Artist: {artist}"""


def insights_prompt(
    recent_daily: Sequence[float],
    overall: float,
    streak: int,
    total_days: int,
    recent_notes: List[str],
) -> str:
    daily = ", ".join(f"{avg:.1f}" for avg in recent_daily)
    return f"""Analyze this mood data and provide 2 insights and 2 recommendations:
    Recent daily mood averages: {daily} (scale 0-4)
    Overall average: {overall:.1f}
    Tracking streak: {streak} days
    Total tracking days: {total_days}
    Recent notes: {"; ".join(recent_notes)}

    Format as JSON: {{"insights": ["insight1", "insight2"], "recommendations": ["rec1", "rec2"]}}"""


def song_recommendation_prompt(
    mood: int,
    note: Optional[str] = None,
    genre: Optional[str] = None,
    previous_songs: Optional[List[str]] = None,
) -> str:
    with_note = f' with the note: "{note}"' if note else ""
    with_genre = f" who likes {genre} music" if genre else ""
    avoid = ""
    if previous_songs:
        avoid = f"- Avoid these recently recommended songs: {', '.join(previous_songs)}"

    return f"""Recommend 5 songs for someone feeling "{MOOD_LABELS[mood]}"{with_note}{with_genre}.

    Consider:
    - Mood-appropriate songs (matching or uplifting)
    - Mix of popular and lesser-known tracks
    - Various artists and time periods
    {avoid}

    Return as JSON:
    {{
      "recommendations": [
        {{
          "title": "Song Title",
          "artist": "Artist Name",
          "reason": "Why this song fits the mood (1 sentence)",
          "energy": 3.5,
          "mood_match": 4.2
        }}
      ],
      "playlist_vibe": "A brief description of the overall playlist mood and theme"
    }}"""


def describe_track(track: PlaylistTrack) -> str:
    line = f"{track.title} by {track.artist}"
    if track.album:
        line += f" ({track.album})"
    if track.year:
        line += f" [{track.year}]"
    return line


def playlist_personality_prompt(tracks: List[PlaylistTrack], metadata: dict) -> str:
    summary = "\n".join(describe_track(t) for t in tracks[:PLAYLIST_PROMPT_TRACKS])
    return f"""Analyze this music playlist to create a detailed personality profile using the Big Five personality traits (Openness, Conscientiousness, Extraversion, Agreeableness, Neuroticism).

PLAYLIST ANALYSIS ({len(tracks)} songs):
{summary}

METADATA:
- Total tracks: {len(tracks)}
- Unique artists: {metadata["uniqueArtists"]}
- Top artists: {", ".join(metadata["topArtists"])}
- Year range: {metadata["yearRange"]}
- Artist diversity: {metadata["artistDiversity"]}

Based on music psychology research, analyze:
1. Musical diversity and exploration (Openness)
2. Playlist organization and consistency (Conscientiousness)
3. Social vs. introspective music choices (Extraversion)
4. Collaborative and harmonious vs. aggressive music (Agreeableness)
5. Emotional intensity and mood patterns (Neuroticism)

Consider factors like:
- Genre diversity and experimental music choices
- Era preferences (nostalgia vs. current trends)
- Artist mainstream popularity vs. niche selections
- Emotional themes and energy levels
- Cultural and linguistic diversity

Provide a comprehensive personality analysis with scores 1-10 for each trait.

Respond with valid JSON only:
{{
  "traits": {{
    "openness": number,
    "conscientiousness": number,
    "extraversion": number,
    "agreeableness": number,
    "neuroticism": number
  }},
  "summary": "detailed 2-3 sentence personality summary",
  "musicPreferences": ["preference1", "preference2", "preference3", "preference4"],
  "personalityInsights": ["insight1", "insight2", "insight3", "insight4"],
  "recommendations": ["recommendation1", "recommendation2", "recommendation3"]
}}"""
