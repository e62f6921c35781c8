"""Static episode lists served when no file host returns anything."""
from typing import Dict, List, Optional

from otakuflix.episodes.models import CanonicalEpisode, ServerInfo


def _episode(anime_id: str, number: int, title: str, provider: str, file_code: str,
             thumbnail: str, synopsis: str, duration: int = 24) -> CanonicalEpisode:
    return CanonicalEpisode(
        id=f"ep{anime_id}-{number}",
        number=number,
        title=title,
        file_code=file_code,
        provider=provider,
        thumbnail=thumbnail,
        duration=duration,
        synopsis=synopsis,
        servers=[ServerInfo(provider=provider, file_code=file_code)],
    )


_KAGUYA_THUMB = "https://iili.io/3vGIm4j.webp"
_SHADOW_THUMB = "https://iili.io/3vGVxSI.webp"

FALLBACK_EPISODES: Dict[str, List[CanonicalEpisode]] = {
    "233": [
        _episode("233", 1, "I Want to be Confessed To: Kaguya Wants to be Confessed To", "Filemoon", "mock_file_code_1", _KAGUYA_THUMB,
                 "Kaguya Shinomiya and Miyuki Shirogane are two geniuses who stand atop their prestigious academy's student council, making them the elite among elite. But it's lonely at the top and each has fallen for the other."),
        _episode("233", 2, "I Want to be Heard: Kaguya Wants to be Heard", "Filemoon", "mock_file_code_2", _KAGUYA_THUMB,
                 "Kaguya tries to get Miyuki to praise her by having him overhear her singing, but her plan backfires. Later, Chika suggests a game of Twenty Questions that quickly turns into a battle of wits between Kaguya and Miyuki."),
        _episode("233", 3, "I Want to be Invited: Kaguya Wants to be Invited", "Filemoon", "mock_file_code_3", _KAGUYA_THUMB,
                 "Miyuki invites everyone but Kaguya to his house to study. Kaguya tries to get herself invited without directly asking. Later, Kaguya and Miyuki compete to see who can make the other look at them first."),
        _episode("233", 4, "I Want to be Visited: Kaguya Wants to be Visited", "Filemoon", "mock_file_code_4", _KAGUYA_THUMB,
                 "Kaguya falls ill and hopes that Miyuki will visit her. Meanwhile, Miyuki struggles with whether he should visit her or not."),
        _episode("233", 5, "I Want to be Stopped: Kaguya Wants to be Stopped", "Filemoon", "mock_file_code_5", _KAGUYA_THUMB,
                 "Kaguya and Miyuki both end up working on the same project. Kaguya hopes that Miyuki will stop her from overworking herself."),
        _episode("233", 6, "I Want to Offer: Kaguya Wants to Offer", "Filemoon", "mock_file_code_6", _KAGUYA_THUMB,
                 "Valentine's Day is approaching, and Kaguya wants to give Miyuki chocolates without making it seem like a romantic gesture."),
        _episode("233", 7, "I Want You to Believe Me: Kaguya Wants to Be Believed", "RpmShare", "mock_file_code_7", _KAGUYA_THUMB,
                 "Kaguya tells a lie that spirals out of control. Meanwhile, Miyuki tries to determine if Kaguya is telling the truth or not."),
        _episode("233", 8, "I Want to Be Covered: Kaguya Wants to Be Covered", "RpmShare", "mock_file_code_8", _KAGUYA_THUMB,
                 "During a rainstorm, Kaguya hopes that Miyuki will offer to share his umbrella with her."),
        _episode("233", 9, "I Want to Do Something: Kaguya Wants to Do Something", "RpmShare", "mock_file_code_9", _KAGUYA_THUMB,
                 "Kaguya and Miyuki both want to do something special for each other but struggle with how to approach it."),
        _episode("233", 10, "I Want to Make You Look Good: Kaguya Wants to Make You Look Good", "RpmShare", "mock_file_code_10", _KAGUYA_THUMB,
                 "Kaguya tries to help Miyuki improve his image, while Miyuki does the same for her."),
        _episode("233", 11, "I Can't Hear the Fireworks, Part 1", "RpmShare", "mock_file_code_11", _KAGUYA_THUMB,
                 "The summer festival is approaching, and Kaguya wants to see the fireworks with Miyuki. However, her family obligations threaten to keep her from attending."),
        _episode("233", 12, "I Can't Hear the Fireworks, Part 2", "RpmShare", "mock_file_code_12", _KAGUYA_THUMB,
                 "Miyuki and the others devise a plan to help Kaguya see the fireworks despite her family's restrictions."),
    ],
    "234": [
        _episode("234", 1, "The Hated Classmate", "Filemoon", "mock_file_code_13", _SHADOW_THUMB,
                 "Cid Kagenou was reborn into a world of magic, where he aspires to become the power in the shadows. He creates an elaborate backstory for his secret organization, Shadow Garden, never expecting it to become real."),
        _episode("234", 2, "Shadow Garden is Born", "Filemoon", "mock_file_code_14", _SHADOW_THUMB,
                 "Cid saves a girl named Alpha and implants false memories about a fictional organization called Shadow Garden. To his surprise, she takes it seriously and begins recruiting others."),
        _episode("234", 3, "A Flock of Black-Winged Followers", "Filemoon", "mock_file_code_15", _SHADOW_THUMB,
                 "Shadow Garden has grown into a real organization with devoted followers. Cid continues his act as their leader while attending school as an ordinary student."),
        _episode("234", 4, "Sadism's Rewards", "RpmShare", "mock_file_code_16", _SHADOW_THUMB,
                 "Cid's elaborate role-playing leads to unexpected consequences as Shadow Garden uncovers a real conspiracy that matches his fictional narrative."),
    ],
}


class FallbackTable:
    """Lookup of static episodes by anime id."""

    def __init__(self, entries: Optional[Dict[str, List[CanonicalEpisode]]] = None):
        self._entries = FALLBACK_EPISODES if entries is None else entries

    def get(self, anime_id: str) -> List[CanonicalEpisode]:
        """Copies of the static episodes for an anime, empty if none are known."""
        return [ep.model_copy(deep=True) for ep in self._entries.get(anime_id, [])]

    def __contains__(self, anime_id: str) -> bool:
        return anime_id in self._entries
