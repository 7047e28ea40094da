"""LLM prompts for resume parsing and analysis.

The same text is sent to every backend; only the transport differs.
"""

PARSE_RESUME_SYSTEM_PROMPT = """You are a resume parsing expert. Extract structured data from the resume text and return it in JSON format with these fields:
- personalDetails: {name, email, phone, location, summary}
- experience: [{title, company, duration, description, achievements}]
- education: [{degree, institution, year, gpa}]
- skills: {technical, soft, languages}
- projects: [{name, description, technologies}]

achievements, technical, soft, languages and technologies are arrays of strings.
Leave out any field that does not appear in the resume.

Return only valid JSON without any additional text."""

ANALYZE_RESUME_SYSTEM_PROMPT = """You are a resume analysis expert. Analyze the resume and provide JSON with:
- score: Overall score 0-100
- suggestions: Array of {type: "warning"|"info"|"success", title, description, section}
- keywords: Important keywords found
- atsCompatibility: ATS compatibility score 0-100

Focus on industry standards, formatting, content quality, and ATS compatibility.
Return only valid JSON."""

JOB_MATCH_SYSTEM_PROMPT = """You are a job matching expert. Compare the resume against the job description and provide JSON with:
- score: Match score 0-100
- suggestions: Specific improvements to match the job better, as an array of {type: "warning"|"info"|"success", title, description, section}
- keywords: Missing keywords from the job description
- atsCompatibility: How well the resume would perform in ATS for this job, 0-100

Return only valid JSON."""

PARSE_RESUME_USER_TEMPLATE = """Parse this resume:

{resume_text}"""

ANALYZE_RESUME_USER_TEMPLATE = """Analyze this parsed resume data:

{resume_json}"""

JOB_MATCH_USER_TEMPLATE = """Resume:
{resume_json}

Job Description:
{job_description}"""

# Used to check that a provider config works end to end.
SAMPLE_RESUME_TEXT = "John Doe\nSoftware Engineer\njohn@example.com\n+1234567890"
