"""Prompt text sent to the language model."""

import json
from typing import Dict, Iterable, List, Optional, Sequence

EVERGREEN_TOPICS: List[str] = [
    "Amenities and Facilities",
    "Sustainability and Resiliency",
    "Public Space",
    "Rejuvenation",
    "Economy",
    "Recreation",
    "Loss of Greenery and Open Space",
    "General DMP19 Enquiries",
    "Parks, Greenery, Biodiversity",
    "Housing",
    "Transport and Mobility",
    "Employment Centers and Offices",
    "Identity/Heritage/Conservation",
    "Health and Medical Care",
    "Sports Facilities",
    "Intensity and Development",
    "Building Height Controls",
    "Information on URA Online",
    "Future Developments",
    "Referred to Other Agencies",
]

WRITING_RULES = """Abide by the following rules when writing.

Use simple language.
Avoid AI-giveaway phrases.
Be direct and concise.
Maintain a natural but also professional tone.
Avoid marketing language.
Keep it real.
Simplify grammar.
Stay away from fluff.
Focus on clarity.
"""

DRAFT_ROLE = (
    "You are representing a planning authority officer helping to draft email "
    "responses to members of the public. You do not have to explicitly state your role."
)

ASSISTANT_ROLE = "You are an AI writing assistant, helping someone to reply to an email."


def format_chunks(chunks: Sequence[Dict]) -> str:
    return "\n\n".join(
        f"{chunk.get('heading', '')}\n{chunk.get('content', '')}" for chunk in chunks
    )


def format_examples(examples: Sequence[Dict]) -> str:
    if not examples:
        return ""
    body = "\n".join(
        f"EXAMPLE {index}:\nOriginal email: {item['message']}\nReply: {item['reply']}\n"
        for index, item in enumerate(examples, start=1)
    )
    return (
        "Here are some related emails and how they were replied to "
        "(ordered by relevance):\n\n" + body
    )


def draft_prompt(message: str, chunks: Sequence[Dict], examples: Sequence[Dict]) -> str:
    return f"""{DRAFT_ROLE} {WRITING_RULES}
Please draft a response to this email:

Content: {message}

Below is some potentially related information to the email. Please use the information appropriately.

{format_chunks(chunks)}

{format_examples(examples)}

When drafting your response, consider the patterns and tone in the example replies if they're provided,
but make sure to adapt your response specifically to this new email.

Please provide the reasoning to how the given information is related to the email. You are to strictly write in the following format.

Reasoning:

Draft:"""


def summary_prompt(message: str, topics: Iterable[str] = EVERGREEN_TOPICS) -> str:
    topic_list = "\n".join(f"- {topic}" for topic in topics)
    return f"""You are a helpful assistant specialized in summarizing and categorizing textual content.
You will be given textual content of a feedback email.

Your first task is to summarize the content concisely, retrieving as many insights as possible.
Limit your summary to 20 words.
Start directly with the main point, without introductory phrases such as "The user is" or "This email is".
Preserve the key details and intent of the email.

Your second task is to categorize this feedback email into the relevant evergreen topics from a given list.
Identify and include all relevant topics.

The list of evergreen topics is as follows:
{topic_list}

Your response must be formatted as a JSON object with the following structure:
{{
  "summary": "<concise summary of the feedback email>",
  "evergreen_topics": ["<relevant topic 1>", "<relevant topic 2>"]
}}

If the given text lacks sufficient information to summarize, do not generate any response.

The message is as follows:
\"\"\"{message}\"\"\"
"""


def headlines_prompt(summaries: Sequence[str]) -> str:
    return f"""You are an AI assistant specialized in natural language processing, particularly in topic modeling and text analysis.
You will be given a list of summaries of feedback from the public to analyze. Identify and rank the top 10 most frequently discussed specific issues and events, as headlines.
These should primarily be concrete projects, locations, policies, or events that have been directly mentioned, rather than broad topics (such as infrastructure, housing, or development).

First, extract broad themes (e.g., Infrastructure, Housing, Environmental Concerns).
Then, identify specific issues or events within those themes and keep frequently mentioned ones as separate headlines rather than folding them into a broad category.

Return the response as a JSON array of objects with this structure:
[
  {{
    "title": "headline 1",
    "match_percent": <feedback volume as a percentage of total summaries>,
    "desc": "Detailed explanation of the headline",
    "entities": ["List of key mentions and named entities"],
    "examples": ["Example feedback snippets"],
    "category": "Broad theme"
  }}
]

Return only JSON. Do not include any other text.
This is the list of feedback summaries:
{json.dumps(list(summaries))}"""


def evergreen_prompt(topic: str, summaries: Sequence[str]) -> str:
    return f"""You are an AI assistant specialized in natural language processing, particularly in topic modeling and text analysis.
You will be given a list of summaries of feedback from the public and an evergreen topic that these summaries fall under.
Your task is to generate exactly 3 trends or learning takeaways for the evergreen topic, based on the feedback summaries.

Recognize and extract specific locations, projects, policies, government decisions, and events that appear in the feedback.
For each trend, generate a headline, a detailed description, a sentiment score (positive/neutral/negative) and example feedback snippets.

Return JSON in this exact format (as an array of objects):
[
  {{
    "headline": "Headline of the trend",
    "desc": "Detailed description of the trend",
    "score": "positive/neutral/negative",
    "examples": ["Example feedback snippet 1", "Example feedback snippet 2"]
  }}
]

Only return valid JSON. Do not include any other text.

Evergreen Topic: "{topic}"
Feedback Summaries: {json.dumps(list(summaries))}"""


ASSIST_INSTRUCTIONS: Dict[str, str] = {
    "continue": (
        "You will be continuing existing text based on context from prior text. "
        "Give more weight/priority to the later characters than the beginning ones. "
        "Limit your response to no more than 200 characters, but make sure to construct complete sentences. "
        "Use Markdown formatting when appropriate."
    ),
    "improve": (
        "You will be improving the existing text. "
        "Limit your response to no more than 200 characters, but make sure to construct complete sentences. "
        "Use Markdown formatting when appropriate."
    ),
    "shorter": "You will be shortening the following text appropriately. Use Markdown formatting when appropriate.",
    "longer": "You will be lengthening existing text. Use Markdown formatting when appropriate.",
    "fix": (
        "You will be fixing grammar and spelling errors in existing text. "
        "Limit your response to no more than 200 characters, but make sure to construct complete sentences. "
        "Use Markdown formatting when appropriate."
    ),
    "zap": (
        "You will now generate text based on a given prompt. "
        "You take an input from the user and a command for manipulating the text. "
        "Use Markdown formatting when appropriate."
    ),
}


def assist_user_message(option: str, text: str, command: Optional[str] = None) -> str:
    if option == "continue":
        return text
    if option == "shorter":
        return f"The text is: {text}"
    if option == "zap":
        return f"For this text: {text}. You have to respect the command: {command or ''}"
    return f"The existing text is: {text}"
