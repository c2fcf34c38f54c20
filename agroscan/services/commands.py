from types import MappingProxyType
from typing import Mapping, Optional

COMMANDS: Mapping[str, str] = MappingProxyType({
    "help": "You can ask me about soil health, crop recommendations, pest management, and general agriculture advice.",
    "who are you": "I am AgroBot, your professional agriculture assistant. I provide guidance on crops, soil, and farming best practices.",
    "hello": "Hello! How can I assist you with your farm or garden today?",
    "hi": "Hi there! Ask me anything about agriculture.",
    "thank you": "You're welcome! Happy to help with your agricultural queries.",
    "bye": "Goodbye! Wishing you a successful harvest.",
})


def normalize_command(message: str) -> str:
    return message.strip().lower()


def lookup_command(message: str, commands: Mapping[str, str] = COMMANDS) -> Optional[str]:
    return commands.get(normalize_command(message))
