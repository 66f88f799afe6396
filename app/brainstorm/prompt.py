from __future__ import annotations

from typing import Any

from app.canvas.text import to_compact_json
from app.domain.exceptions import BusinessValidationError

Message = dict[str, Any]

# System prompts are sent word for word as the whiteboard has always sent them;
# sentences that run together without a space are part of that text.

# ---------------------------------------------------------------------------
# Dimensions: split a plan into 5 ranked dimensions of 3 subtopics each.
# ---------------------------------------------------------------------------

DIMENSIONS_SYSTEM_PROMPT = (
    "Imagine you're the GPT-4 AI, assigned to support a team in their brainstorming session. "
    "During the session, team may plan an event which needs to be divided into different "
    "dimensions of topics in order to make it convenient to discuss."
    "Your task is to generate 5 dimensions of. In each dimension, you need to list 3 subtopics "
    "related to the dimension. Each subtopics contain a heading summary and description."
    "Also you need to rank the subtopics from most recommended to least recommended."
    "Return the response in the provided JSON format."
)

DIMENSIONS_ASSISTANT_PROMPT = """
The returned JSON objects should follow this format:
{
    "dimensions": [
        {
            "topic": "topic of the first dimension",
            "subtopics": [
                {
                    "heading" : "heading of the first subtopic",
                    "description": "description of the first subtopic"
                },
                {
                    "heading" : "heading of the second subtopic",
                    "description": "description of the second subtopic"
                },
                ...
            ]
        },
        {
            "topic": "topic of the second dimension",
            "subtopics": [
                {
                    "heading" : "heading of the first subtopic",
                    "description": "description of the first subtopic"
                },
                {
                    "heading" : "heading of the second subtopic",
                    "description": "description of the second subtopic"
                },
                ...
            ]
        },
        ...
    ]
}

Example of the return json file if the plan is to travel to California:
{
    "dimensions": [
        {
            "topic": "Accommodation",
            "subtopics": [
                {
                    "heading" : "Book in Advance",
                    "description": "Secure accommodations well in advance to have more options and potentially lower rates."
                },
                {
                    "heading" : "Location Proximity",
                    "description": "Choose accommodations centrally located to major attractions or public transportation hubs for convenience."
                },
                ...
            ]
        },
        ...
    ]
}

Note that the objects in the value list of the subtopics in each dimension are ranked. The first one should be the most recommeneded. Therefore, in the example above, "Book in Advance" is the most recommended.
"""

DIMENSIONS_INSTRUCTION = (
    "Here are several plans that need to be divided into 5 dimensions. "
    "Below is the input text of plan:"
)
NO_PLAN_TEXT = "Oh, it looks like there was not any plan."

# ---------------------------------------------------------------------------
# Grouping: classify the notes of a frame along user-given dimensions.
# ---------------------------------------------------------------------------

GROUPING_SYSTEM_PROMPT = (
    "Imagine you are the GPT-4 model, designed to assist a team in brainstorming sessions. "
    "During the session, the team may want to group different ideas from notes according to "
    "some dimensions. "
    "Your need to analyze all notes first, and then group them into differnt classes according "
    "to the specified dimensions. The notes in the same class should share similar property, "
    "and the class name is the same as the shared property. It is possible that one note can "
    "appear in different classes. The property should be insightful enough to contribute to the "
    "brainstorming. The property should also be very detailed and must be a sentence. It should "
    "contain adjective when necessary to better elaborate the similar property of and "
    "relationship among the notes in the same group, and distinguish them from the notes in "
    "other groups"
    "Moreover, you also need to calculate the confidence value (in range of 0 to 1) of specific "
    "note in the class, which indicates how confident you are to put this note in this class. The "
    "value 1 indicates that the note perfectly fits the class, and the value 0 indicates the note "
    "has no relation with the class."
    "Your task is to 1. return all classes. Each class name is the property of the notes assigned "
    "to this class under the consideration of the dimensions. Notice you must analyze notes and "
    "figure out the classes *according to the dimensions*. The properties represented by the "
    "classes should be different enough in order to generate insightful and meaningful effect "
    "for the brainstorming process. In other words, the property should not be too similar. "
    'For example, "the object is big" and "the object is large" are similar, so there should not '
    'be two classes named "the object is big" and "the object is large"'
    "2. return all groups that contains the class and the notes and also the confidence value of "
    "each note in this group.\n"
    "Return the result in the provided JSON format, as indicated in the assistantPrompt."
)

GROUPING_ASSISTANT_PROMPT = """The returned JSON objects should follow this format:
{
    "classes": [
        description of the property of class1, description of the property of class2, ...
    ],
    "classification": [
        {
            "class": "description of the property",
            "notes":[
                {"id": 1, "confidence": "0.89"},
                {"id": 3, "confidence": "0.7"},
                {"id": 4, "confidence": "0.6"},
            ]
        },
        {
            "class": "description of the property",
            "notes":[
                {"id": 2, "confidence": "0.4"},
                {"id": 3, "confidence": "0.8"},
            ]
        },
        {
            ...
        }
    ]
}

If the dimension is cost and the notes are "buy a house" (id is 1), "buy a doll" (id is 2), and "buy a meal" (id is 3), then the example of return JSON object:
{
    "classes": [
        "cost of doing so is large", "cost of doing so is small"
    ],
    "classification": [
        {
            "class": "cost of doing so is large",
            "notes":[
                {"id": 1, "confidence": "0.89"},
            ]
        },
        {
            "class": "cost of doing so is small",
            "notes":[
                {"id": 2, "confidence": "0.92"},
                {"id": 3, "confidence": "0.8"},
            ]
        },
        {
            ...
        }
    ]
}

Note you should use node id provided to you in the input JSON object. Also, the value of "class" inside the "classification" must be from the "classes" key.

"""

GROUPING_INSTRUCTION = (
    "Here are dimensions and the thinking notes. The first is the list of dimension, and the "
    "second is a list of JSON format where text means the note content and id means the note id. "
    "Please group the notes according to the dimensions and return a json file that contains all "
    "the classes and the specific classification result"
)
MISSING_DIMENSIONS_MESSAGE = "Please specify the dimensions."

# ---------------------------------------------------------------------------
# Summary: relate the groups and ideas of a frame to a title.
# ---------------------------------------------------------------------------

SUMMARY_SYSTEM_PROMPT = (
    "Imagine you are a very smart, logical, and consistent summarizer for users. You are good at "
    "summarizing relatoinship between groups of node ideas and the title, summarizing "
    "relatoinship between individual node idea and the title, and mentioning related points from "
    "all specific nodes ideas in your resulting summary. Users can then understand the "
    "relationship between the title and group of ideas or individual ideas. "
    'You are given the title and a list of individual ideas and groups which contain some ideas. '
    'In the input JSON object, "title" indicates the title, and "idea" indicates the list of '
    'groups (type: "new_frame") and individual ideas (type: "node"). If it is the group object, '
    'you need to look at its "children" attribute instead of "text" attribute because it '
    'contains all nodes in that group. If it is a node object, you need to look at its "text" '
    'attribute instead of "children" attribute.'
    "Your task is 1. You need to summarize all groups of node ideas and individual node ideas. "
    "The resulting summary should be paragraph based. For example, if there are 2 groups and 3 "
    "individual nodes, the summary should have 5 paragraphs. "
    "2. It is critical to use the exact text from the text attribute of ideas in your summary. "
    "This ensures readers can directly correlate summary points with their respective ideas. "
    "After summarizing, provide a matching list that connects exact phrases from your summary to "
    "the corresponding idea IDs. "
    "The explanation of input JSON format is below. Return the text in the provided JSON format."
)

SUMMARY_ASSISTANT_PROMPT = """The input JSON format is a list of ideas that could have some logical relationships among them.

The input JSON objects of title and list of groups and ideas follow this format:
{
    "title": "the title that the groups or individual ideas need to have relationship with",
    "idea": [
        {
            "id": "id of node",
            "type": "node",
            "text": "the idea written on the node"
        },
        {
            "id": "id of frame",
            "type": "new_frame",
            "text": "the name of the group",
            "children": [
                {
                    "id": "id of the children node inside the group",
                    "text": "the idea written on the node"
                },
                {
                    "id": "id of the children node inside the group",
                    "text": "the idea written on the node"
                },
            ]
        },
        ....
    ]
}

The returned JSON objects should follow this format:
{
    "summary": "the paragraph summary, the first few paragraphs is the summary of relationship between ideas in the group and the title, and the remaining paragraphs is the summary of relationship between individual ideas and the title",

    "referenceMatching": [
        {
            "reference": "the exact text from the generate summary correspond to the node",
            "node id": "id of the node that is related to the reference text"
        },
        {
            ...
        },
        ...
    ]
}

Note you should use node id provided to you in the input JSON object.

"""

SUMMARY_INSTRUCTION = (
    "The first text is the title. The second text is the list of groups and individual ideas, "
    "which are presented in a JSON format as described. Please summarize relationship between "
    "the title and groups of ideas or individual ideas into paragraphs."
)
NO_TITLE_TEXT = "Oh, it looks like there was no title."


def _text_part(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


def _messages(
    *, system_prompt: str, user_parts: list[dict[str, str]], assistant_prompt: str
) -> list[Message]:
    # The assistant turn primes the output format after the user's input.
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_parts},
        {"role": "assistant", "content": assistant_prompt},
    ]


def require_dimensions(dimensions: list[str]) -> None:
    if len(dimensions) == 0:
        raise BusinessValidationError(MISSING_DIMENSIONS_MESSAGE)


def build_dimensions_messages(*, text: str) -> list[Message]:
    """Messages asking for 5 ranked dimensions of the given plan text."""

    return _messages(
        system_prompt=DIMENSIONS_SYSTEM_PROMPT,
        user_parts=[
            _text_part(DIMENSIONS_INSTRUCTION),
            _text_part(text if text != "" else NO_PLAN_TEXT),
        ],
        assistant_prompt=DIMENSIONS_ASSISTANT_PROMPT,
    )


def build_grouping_messages(
    *, dimensions: list[str], notes: list[dict[str, Any]]
) -> list[Message]:
    """
    Messages asking to classify `notes` along `dimensions`.

    Both lists travel as compact JSON text parts, so an empty frame sends `[]`.
    """

    require_dimensions(dimensions)

    return _messages(
        system_prompt=GROUPING_SYSTEM_PROMPT,
        user_parts=[
            _text_part(GROUPING_INSTRUCTION),
            _text_part(to_compact_json(dimensions)),
            _text_part(to_compact_json(notes)),
        ],
        assistant_prompt=GROUPING_ASSISTANT_PROMPT,
    )


def build_summary_messages(*, title: str, ideas: list[dict[str, Any]]) -> list[Message]:
    return _messages(
        system_prompt=SUMMARY_SYSTEM_PROMPT,
        user_parts=[
            _text_part(SUMMARY_INSTRUCTION),
            _text_part(title if title != "" else NO_TITLE_TEXT),
            _text_part(to_compact_json(ideas)),
        ],
        assistant_prompt=SUMMARY_ASSISTANT_PROMPT,
    )
