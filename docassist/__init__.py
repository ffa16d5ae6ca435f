"""Document assistant: send selected text to a chat-completion endpoint and
write the reply back into the document.

Packages:
- docassist.docs: document model, selection adapter, txt/docx I/O
- docassist.llm: completion client and prompt templates
- docassist.settings: per-user settings store
- docassist.commands: menu and command layer
"""

__version__ = "0.1.0"
