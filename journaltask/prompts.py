"""
LangChain prompt templates for task extraction.

The system prompt carries the fixed extraction rules and the JSON response
schema; literal braces are doubled so ChatPromptTemplate leaves them alone.
"""

from langchain_core.prompts import ChatPromptTemplate

EXTRACTION_SYSTEM_PROMPT = """\
You are a meticulous personal assistant who turns free-form journal entries into a structured, dependency-aware task list.

Current Date: {current_date}

## Extraction Rules

1. Entries are chronological with the latest at the top.
2. If text is struck through (formatted as ~~text~~) or explicitly described as completed, set status to "done". Otherwise use "todo".
3. If text is highlighted in red or described as "Urgent", "[URGENT]" or "Critical", set isUrgent to true.
4. Infer dependencies between tasks from context (e.g., "Must finish A before starting B" means B depends on A). Reference tasks by their id.
5. Extract due dates as ISO-8601 dates (YYYY-MM-DD) when a deadline is mentioned; otherwise use null.
6. Assign a short category such as "Work", "Personal", "Health" or "Finance".
7. Use the date of the journal entry as createdAt. If an entry has no date, use the current date.

## Output Format

Respond with a single JSON object and nothing else (no Markdown, no commentary):

```
{{
  "tasks": [
    {{
      "id": "a-unique-slugified-id",
      "title": "Short title of the task",
      "description": "Detailed description of what needs to be done",
      "dueDate": "2024-12-05" or null,
      "category": "Work",
      "status": "todo" or "done",
      "isUrgent": true or false,
      "dependencies": ["id-of-a-task-this-depends-on"],
      "createdAt": "2024-12-01"
    }}
  ]
}}
```

Every field except dueDate is required. Task ids must be unique. If the journal contains no tasks, respond with {{"tasks": []}}."""

EXTRACTION_HUMAN_PROMPT = """\
Extract the tasks from the following journal content:

JOURNAL CONTENT:
{journal_content}"""

EXAMPLE_JOURNAL = """\
2024-05-15:
- ~~Update the team sync calendar~~
- Prepare the Q3 Roadmap presentation [URGENT].
- Research new GCP deployment strategies.
- Need to approve the design mockups before starting front-end development.
- Buy office supplies."""


def get_extraction_prompt() -> ChatPromptTemplate:
    """Get the task extraction prompt template.

    Variables:
        current_date: ISO date used when an entry has no date (e.g., "2024-12-30")
        journal_content: The raw journal text

    Returns:
        ChatPromptTemplate configured for task extraction
    """
    return ChatPromptTemplate.from_messages([
        ("system", EXTRACTION_SYSTEM_PROMPT),
        ("human", EXTRACTION_HUMAN_PROMPT),
    ])
