"""Regex building blocks shared by the requisite matchers."""

# Subject, i.e. HIST
R_SUBJECT = r"[A-Z]{2,4}"

# Subject + course number, captured as (subject, number), i.e. CS 1337, BIOL1
R_SUBJ_COURSE_CAP = r"([A-Z]{2,4})\s*([0-9V]{1,4})"

# Subject + course number, uncaptured
R_SUBJ_COURSE = r"[A-Z]{2,4}\s*[0-9V]{1,4}"

# Letter grade, i.e. C-
R_GRADE = r"[ABCFabcf][+-]?"

# Class standings
R_YEARS = r"(?:freshm[ae]n|sophomores?|juniors?|seniors?)"
