# app/services/llm/prompts.py
"""
Prompt templates and response schemas for blog generation and translation.

The OpenAI adapter sends the JSON layout inline in the prompt and parses the
object out of free text; the Gemini adapter passes the same layout as a
response schema so the output is constrained by the provider.
"""

BLOG_SYSTEM_INSTRUCTION = """You're a professional blogger writing a complete, SEO-optimized blog post on the title given in the prompt. Follow these rules carefully:
* Content is unique and original, with fresh perspectives, data and insights.
* Write in a natural, conversational tone; mix short and long sentences and avoid repetitive phrasing.
* Use personal anecdotes, real-world examples, case studies and expert quotes where relevant.
* Integrate low-competition, long-tail keywords naturally into headings, subheadings and body text.
* Use HTML tags (<h2>, <h3>, <p>, <ul>, <li>) only in 'introduction', 'content', 'content1', 'content2' and 'conclusion'.
* Split the body into 'content', 'content1' and 'content2' so every angle of the topic is covered in depth, at least 3000 words overall.
* Start with a compelling hook and finish with a conclusion that summarizes the key points.
* Write a call to action that fits the requested call-to-action type and offers a clear value proposition.
* Follow E-E-A-T principles: show experience and expertise, cite reputable recent sources, stay accurate."""

BLOG_PROMPT_TEMPLATE = """Generate a blog post on the topic "{title}".

Return the result as a single JSON object in exactly this format, with no additional text:

{{
  "title": "Catchy title that helps in SEO ranking",
  "subtitle": "Catchy subtitle",
  "slug": "seo-friendly-slug",
  "overview": "A short SEO friendly overview of the topic",
  "category": "Relevant main category for the blog post",
  "subcategory": "Relevant subcategory for the blog post",
  "SEO": {{
    "metaTitle": "SEO meta title under 60 characters",
    "metaDescription": "A brief, compelling summary including the main keywords",
    "metaKeywords": ["keyword1", "keyword2", "keyword3"],
    "OGtitle": "A compelling title for social media sharing",
    "OGdescription": "A short description for social media sharing"
  }},
  "tags": ["tag1", "tag2", "tag3"],
  "introduction": "<p>Engaging introduction in HTML</p>",
  "image": "Prompt describing a main image relevant to the topic",
  "content": "<h2>...</h2><p>Main body in HTML</p>",
  "content1": "<h2>...</h2><p>Deeper insights and related subtopics in HTML</p>",
  "content2": "<h2>...</h2><p>Advanced concepts or future outlook in HTML</p>",
  "conclusion": "<p>Conclusion in HTML</p>",
  "callToAction": "Relevant call to action text for {cta_type}",
  "author": {{
    "name": "Author name",
    "about": "Short author bio related to the topic"
  }}
}}
"""

GEMINI_BLOG_PROMPT_TEMPLATE = """title: {title},
cta_for: {cta_type}"""


def _string(description):
    return {"type": "STRING", "description": description, "nullable": False}


def _string_list(description, item_description):
    return {
        "type": "ARRAY",
        "items": _string(item_description),
        "description": description,
        "nullable": False,
    }


SEO_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "metaTitle": _string("An SEO-friendly meta title, under 60 characters."),
        "metaDescription": _string("Compelling meta description with primary keywords and a hook."),
        "metaKeywords": _string_list(
            "Array of low-competition, long-tail and LSI keywords for SEO (max 4).",
            "A single keyword for SEO.",
        ),
        "OGtitle": _string("Shareable title for social media."),
        "OGdescription": _string("Short, engaging description for social media."),
    },
    "required": ["metaTitle", "metaDescription", "metaKeywords", "OGtitle", "OGdescription"],
}

AUTHOR_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "name": _string("Author's name."),
        "about": _string("Author bio highlighting expertise in the topic."),
    },
    "required": ["name", "about"],
}

BLOG_RESPONSE_SCHEMA = {
    "description": "SEO-optimized blog post",
    "type": "OBJECT",
    "properties": {
        "title": _string("SEO-optimized title."),
        "subtitle": _string("Catchy subtitle that complements the title."),
        "slug": _string("SEO-friendly slug based on the title."),
        "overview": _string("Engaging overview of the topic, optimized for SEO."),
        "category": _string("Relevant main category."),
        "subcategory": _string("Appropriate subcategory."),
        "SEO": SEO_SCHEMA,
        "tags": _string_list("Relevant tags for the blog post (max 4).", "A single tag."),
        "introduction": _string("Introduction with a compelling hook, in HTML."),
        "image": _string("Prompt describing a main image relevant to the topic."),
        "content": _string("Main body covering the key aspects of the topic, in HTML."),
        "content1": _string("Additional section with deeper insights or related subtopics, in HTML."),
        "content2": _string("Further section on advanced concepts or future outlook, in HTML."),
        "conclusion": _string("Conclusion summarizing the key points, in HTML."),
        "callToAction": _string("Call to action aligned with the requested call-to-action type."),
        "author": AUTHOR_SCHEMA,
    },
    "required": [
        "slug", "title", "subtitle", "introduction", "overview", "content",
        "content1", "content2", "category", "subcategory", "SEO", "tags",
        "conclusion", "author",
    ],
}

SLUG_SYSTEM_INSTRUCTION = """You are an expert at generating unique, SEO-friendly slugs for blog posts.
Create a new slug based on the existing one, keeping it relevant and unique.
Reply with one slug only, without extra text."""

SLUG_PROMPT_TEMPLATE = """The existing slug "{slug}" is already in the database.
Generate a new, unique and relevant slug."""

TRANSLATION_SYSTEM_INSTRUCTION = """Translate the given object into the language with the two-letter code: {language}. Keep the translation accurate and grammatical, and follow these rules:
1. Preserve HTML tags: do not alter or remove any HTML tag.
2. SEO: keep keywords in their original form when there is no direct translation; do not translate technical or brand terms.
3. Adapt phrasing to the cultural context of the target language while preserving the meaning.
4. Do not translate proper nouns such as the author's name.
5. Keep the structure (headings, sections, paragraphs) unchanged.
6. Keep the call to action compelling in the target language.
Return an object with exactly the same keys as the input."""

TRANSLATION_RESPONSE_SCHEMA = {
    "description": "Blog fields translated to the given two-letter language code",
    "type": "OBJECT",
    "properties": {
        "title": _string("Translated title."),
        "subtitle": _string("Translated subtitle."),
        "overview": _string("Translated overview."),
        "author": AUTHOR_SCHEMA,
        "SEO": SEO_SCHEMA,
        "introduction": _string("Translated introduction without altering HTML."),
        "content": _string("Translated content without altering HTML."),
        "content1": _string("Translated content without altering HTML."),
        "content2": _string("Translated content without altering HTML."),
        "conclusion": _string("Translated conclusion without altering HTML."),
        "callToAction": _string("Translated call to action."),
    },
    "required": [
        "title", "subtitle", "overview", "author", "introduction", "content",
        "content1", "content2", "callToAction", "SEO", "conclusion",
    ],
}

TEXT_TRANSLATION_SYSTEM = (
    "You are an assistant that translates plain text content into a specified language "
    "using a two-letter language code. Your response should contain only the translated "
    "text. Do not include any extra text, explanations, or formatting."
)

HTML_TRANSLATION_SYSTEM = (
    "You are an assistant that translates HTML content into a specified language using a "
    "two-letter language code. Preserve every HTML tag and attribute. Your response should "
    "contain only the translated HTML content."
)

JSON_TRANSLATION_SYSTEM = (
    "You are an assistant that translates the string values of JSON content into a specified "
    "language using a two-letter language code. Keep the keys unchanged and do not translate "
    "proper nouns. Your response should contain only the translated JSON content."
)

FIELD_TRANSLATION_PROMPT = """Translate the following {kind} content into the language specified by the two-letter language code provided. Provide only the translated {kind} content without any additional text.

{kind} Content:
{value}

Language Code:
{language}"""
