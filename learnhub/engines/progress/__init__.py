"""
Progress Engine - Course playback and topic completion.
"""

from learnhub.engines.progress.progress_tracker import (
    COURSE_OVERVIEW_PATH,
    PlaybackEntry,
    PlaybackState,
    ProgressTracker,
    topic_path,
)

__all__ = [
    "COURSE_OVERVIEW_PATH",
    "PlaybackEntry",
    "PlaybackState",
    "ProgressTracker",
    "topic_path",
]
