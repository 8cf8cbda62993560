"""Example conversations shown in the sidebar before the user starts chatting."""
from datetime import datetime, timezone
from typing import Optional

from ...domain.entities import ChatMessage, ChatSession


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


DEMO_SESSIONS: list[ChatSession] = [
    ChatSession(
        session_id="demo-1",
        messages=[
            ChatMessage(
                role="user",
                content="What can you help me with?",
                timestamp=_at("2024-01-15T10:00:00"),
            ),
            ChatMessage(
                role="assistant",
                content="""I'm Nova, your AI assistant! I can help you with a wide range of tasks:

1. **Answer questions** on topics like science, history, technology, arts, and more
2. **Explain complex concepts** in simple, understandable terms
3. **Assist with writing** including emails, essays, creative content, or professional documents
4. **Provide information** on current topics (though my knowledge has a cutoff date)
5. **Generate ideas** for projects, gifts, activities, or creative endeavors
6. **Help with planning** for events, schedules, or processes
7. **Discuss and explore** various subjects you're interested in

Just let me know what you need assistance with, and I'll do my best to help! What would you like to know about today?""",
                timestamp=_at("2024-01-15T10:01:00"),
            ),
        ],
    ),
    ChatSession(
        session_id="demo-2",
        messages=[
            ChatMessage(
                role="user",
                content="Tell me something interesting about space.",
                timestamp=_at("2024-01-15T14:30:00"),
            ),
            ChatMessage(
                role="assistant",
                content="""Here's something fascinating about space that you might not know:

The largest known structure in the observable universe is the Hercules-Corona Borealis Great Wall. This is a gigantic supercluster of galaxies that spans approximately 10 billion light-years across! To put this in perspective, the entire observable universe is estimated to be about 93 billion light-years in diameter, which means this single structure spans more than 10% of the entire observable universe.

What makes this even more mind-boggling is thinking about the scale: each of those galaxies contains billions of stars, and many of those stars have their own planetary systems. The sheer scale of cosmic structures challenges our understanding of how the universe formed and evolved after the Big Bang.

Would you like to hear more space facts, or perhaps learn about something specific like black holes, exoplanets, or space exploration?""",
                timestamp=_at("2024-01-15T14:31:00"),
            ),
        ],
    ),
    ChatSession(
        session_id="demo-3",
        messages=[
            ChatMessage(
                role="user",
                content="I need some creative ideas for a mystery-themed party.",
                timestamp=_at("2024-01-16T09:15:00"),
            ),
            ChatMessage(
                role="assistant",
                content="""# Mystery Party Ideas

Here are some creative ideas for your mystery-themed party that will leave your guests amazed:

## Theme Options
- **Murder Mystery Mansion**: Classic whodunit set in a Victorian mansion
- **Cyberpunk Detective**: Futuristic mystery with high-tech elements
- **Ancient Egyptian Curse**: Mysterious artifacts and hieroglyphic clues
- **Film Noir Mystery**: Black and white dress code with jazzy background music
- **Haunted Carnival**: Creepy circus vibes with fortune tellers and mysterious games

## Atmosphere Elements
- Use dimmed purple and blue lighting with fog machines
- Place vintage magnifying glasses and detective hats as props
- Create evidence walls with red string connecting clues
- Set up hidden speakers playing mysterious ambient sounds
- Use QR codes that reveal cryptic messages when scanned

## Interactive Activities
- **The Locked Box Challenge**: Multiple puzzles leading to a locked treasure
- **Invisible Ink Messages**: UV flashlights reveal hidden clues on the walls
- **Suspect Interrogation**: Guests take turns questioning "suspects"
- **Cryptic Cocktails**: Drinks that change color or reveal messages when mixed
- **Digital Scavenger Hunt**: Using smartphones to find augmented reality clues

Would you like me to expand on any of these ideas or suggest specific games, decorations, or food that would complement the mystery theme?""",
                timestamp=_at("2024-01-16T09:17:00"),
            ),
        ],
    ),
    ChatSession(
        session_id="demo-4",
        messages=[
            ChatMessage(
                role="user",
                content="What are some mind-blowing facts about the universe?",
                timestamp=_at("2024-01-17T18:22:00"),
            ),
            ChatMessage(
                role="assistant",
                content="""# Mind-Blowing Universe Facts

Here are some truly mind-bending facts about our universe that might change how you see reality:

## Scale & Size
- If the Sun were the size of a white blood cell, the Milky Way would be the size of the continental United States
- There are more stars in the universe than grains of sand on all Earth's beaches combined, approximately 10^23 stars
- Light from the most distant galaxies we can observe has been traveling for over 13 billion years

## Time & Physics
- Time passes faster at your head than at your feet due to Earth's gravity (time dilation)
- Due to the universe's expansion, galaxies can move away from each other faster than light speed
- If you could somehow survive inside a black hole, you might see the entire future of the universe unfold before your eyes in an instant

## Cosmic Phenomena
- We're made of star stuff: nearly all elements heavier than hydrogen and helium were forged inside stars
- There's a giant cloud of alcohol in Sagittarius B containing enough ethyl alcohol to fill 400 trillion trillion pints of beer
- Some diamonds in space are larger than Earth; one diamond exoplanet is estimated to be five times the size of Earth

## Mind-Bending Concepts
- According to quantum physics, particles can be in multiple places simultaneously until observed
- The observable universe is just a tiny fraction of the entire universe; we can only see the light that's had time to reach us
- If you could fold a piece of paper 42 times, it would reach the moon; 103 times would make it larger than the observable universe

Which of these would you like to learn more about? I can explain any of these phenomena in more detail!""",
                timestamp=_at("2024-01-17T18:24:00"),
            ),
        ],
    ),
]


def get_demo_session(session_id: str) -> Optional[ChatSession]:
    """Return a copy of a demo conversation, or None for an unknown id."""
    for session in DEMO_SESSIONS:
        if session.session_id == session_id:
            return session.model_copy(deep=True)
    return None
