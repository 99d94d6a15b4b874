from __future__ import annotations

RESUME_ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert resume reviewer and career counselor with 15+ years of experience in "
    "recruitment and talent acquisition. Your task is to provide comprehensive, constructive "
    "feedback on resumes to help job seekers optimize their applications for specific roles.\n\n"
    "Analyze resumes across these key dimensions:\n"
    "1. Contact Information: completeness, professionalism, ATS compatibility\n"
    "2. Professional Summary: relevance, impact, keyword optimization\n"
    "3. Work Experience: achievement focus, quantifiable results, relevance to target role\n"
    "4. Education: relevance, presentation, additional qualifications\n"
    "5. Skills: technical/soft skill balance, role alignment, credibility\n"
    "6. Projects: innovation, business impact, technical complexity\n"
    "7. Certifications: industry relevance, recency, credibility\n"
    "8. Overall Formatting: ATS compatibility, readability, professional appearance\n\n"
    "For each section, provide a score (0-10 scale), specific feedback with actionable "
    "improvements, strengths to highlight and expand, issues that need immediate attention, "
    "and suggestions for enhancement.\n\n"
    "Focus on job-role alignment, ATS optimization, achievement quantification, keyword "
    "optimization and professional presentation. Be constructive, specific, and actionable in "
    "your feedback. Prioritize improvements by impact. Respond with a single JSON object only."
)

ANALYSIS_OUTPUT_SCHEMA = """{
  "overallScore": <number 0-100>,
  "maxOverallScore": 100,
  "summary": "<2-3 sentence overall assessment>",
  "sections": [
    {
      "name": "<section name>",
      "score": <number 0-10>,
      "maxScore": 10,
      "feedback": ["<specific feedback point 1>", "<specific feedback point 2>"],
      "suggestions": ["<improvement suggestion 1>", "<improvement suggestion 2>"],
      "strengths": ["<strength 1>", "<strength 2>"],
      "issues": ["<issue 1>", "<issue 2>"]
    }
  ],
  "keyFindings": {
    "strengths": ["<top 3-5 resume strengths>"],
    "majorIssues": ["<top 3-5 critical issues to fix>"],
    "missingSkills": ["<skills mentioned in job role/description but missing from resume>"],
    "atsCompatibility": <number 0-10>,
    "improvementPriority": ["<top 3 improvements in priority order>"]
  },
  "jobAlignment": {
    "matchScore": <number 0-10>,
    "relevantExperience": ["<relevant experience highlights>"],
    "skillGaps": ["<skills gaps compared to job requirements>"],
    "recommendations": ["<top 3 tailoring recommendations>"]
  }
}"""


def build_job_context(job_role: str, job_description: str | None = None) -> str:
    description = (job_description or "").strip()
    if description:
        return f"**Target Job Description:**\n{description}\n\n"
    return f"**Target Job Role:** {job_role.strip()}\n\n"


def build_resume_analysis_prompt(
    resume_content: str,
    job_role: str,
    job_description: str | None = None,
) -> str:
    return (
        f"{build_job_context(job_role, job_description)}"
        f"**Resume Content:**\n{resume_content}\n\n"
        "**Instructions:**\n"
        "Please analyze this resume for the specified role and provide a comprehensive review "
        "in the following JSON format:\n\n"
        f"{ANALYSIS_OUTPUT_SCHEMA}\n\n"
        "Ensure all scores are realistic and justified. Focus on actionable, specific feedback "
        "that will genuinely improve the candidate's chances."
    )
