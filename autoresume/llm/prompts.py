TAILOR_RESUME = """You are a professional resume writer. Your task is to modify the given resume to better target a specific job description.
Follow these rules:
1. Keep the same markup format as the original resume (e.g. LaTeX stays LaTeX)
2. Highlight relevant skills and experiences
3. Use keywords from the job description
4. Be concise and professional
5. Do not invent new experiences

Original Resume:
{resume}

Job Description:
{job_description}

Please provide the modified resume in the same format as the original."""


def build_tailor_prompt(resume: str, job_description: str) -> str:
    return TAILOR_RESUME.format(resume=resume, job_description=job_description)
