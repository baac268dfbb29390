"""
Pakistani Education Catalogue

Static reference data: examining boards, subject groups and grade levels.
Source: Wikipedia - List of education boards in Pakistan.
"""

from app.modules.reference.schemas import (
    BoardType,
    EducationBoardInfo,
    EducationType,
    GradeLevel,
    Province,
    SubjectGroup,
)


def _board(
    id: str,
    name: str,
    type: BoardType,
    province: Province,
    established: int,
    jurisdiction: list[str],
    website: str | None = None,
) -> EducationBoardInfo:
    return EducationBoardInfo(
        id=id,
        name=name,
        type=type,
        province=province,
        established=established,
        jurisdiction=jurisdiction,
        website=website,
    )


def _bise(
    id: str,
    city: str,
    province: Province,
    established: int,
    jurisdiction: list[str],
    website: str | None = None,
) -> EducationBoardInfo:
    return _board(
        id,
        f"Board of Intermediate and Secondary Education, {city}",
        BoardType.MATRIC,
        province,
        established,
        jurisdiction,
        website,
    )


EDUCATION_BOARDS: tuple[EducationBoardInfo, ...] = (
    # Islamabad
    _board(
        "fbise",
        "Federal Board of Intermediate and Secondary Education",
        BoardType.BOTH,
        Province.ISLAMABAD,
        1975,
        [
            "Islamabad Capital Territory",
            "Cantonments and Garrisons",
            "Gilgit-Baltistan",
            "Pakistan International School (abroad)",
        ],
        "https://www.fbise.edu.pk",
    ),
    # Punjab
    _bise(
        "bise-bahawalpur",
        "Bahawalpur",
        Province.PUNJAB,
        1998,
        ["Bahawalpur District", "Bahawalnagar District", "Rahim Yar Khan District"],
        "https://www.bisebwp.edu.pk",
    ),
    _bise(
        "bise-dgk",
        "Dera Ghazi Khan",
        Province.PUNJAB,
        1989,
        [
            "Dera Ghazi Khan District",
            "Muzaffargarh District",
            "Layyah District",
            "Rajanpur District",
        ],
        "https://www.bisedgk.edu.pk",
    ),
    _bise(
        "bise-faisalabad",
        "Faisalabad",
        Province.PUNJAB,
        1988,
        ["Faisalabad District", "Chiniot District", "Jhang District", "Toba Tek Singh District"],
        "https://www.bisefsd.edu.pk",
    ),
    _bise(
        "bise-gujranwala",
        "Gujranwala",
        Province.PUNJAB,
        1976,
        [
            "Gujranwala District",
            "Gujrat District",
            "Mandi Bahauddin District",
            "Hafizabad District",
            "Narowal District",
            "Sialkot District",
        ],
        "https://www.bisegrw.com",
    ),
    _bise(
        "bise-lahore",
        "Lahore",
        Province.PUNJAB,
        1954,
        ["Lahore District", "Sheikhupura District", "Nankana Sahib District", "Kasur District"],
        "https://www.biselahore.com",
    ),
    _bise(
        "bise-multan",
        "Multan",
        Province.PUNJAB,
        1968,
        ["Multan District", "Khanewal District", "Vehari District", "Lodhran District"],
        "https://www.bisemultan.edu.pk",
    ),
    _bise(
        "bise-rawalpindi",
        "Rawalpindi",
        Province.PUNJAB,
        1977,
        ["Rawalpindi District", "Jhelum District", "Attock District", "Chakwal District"],
        "https://www.biserwp.edu.pk",
    ),
    _bise(
        "bise-sahiwal",
        "Sahiwal",
        Province.PUNJAB,
        2012,
        ["Sahiwal District", "Okara District", "Pakpattan District"],
        "https://www.bisesahiwal.edu.pk",
    ),
    _bise(
        "bise-sargodha",
        "Sargodha",
        Province.PUNJAB,
        1968,
        ["Sargodha District", "Khushab District", "Mianwali District", "Bhakkar District"],
        "https://www.bisesargodha.edu.pk",
    ),
    # Sindh
    _bise(
        "bise-hyderabad",
        "Hyderabad",
        Province.SINDH,
        1961,
        [
            "Hyderabad District",
            "Matiari District",
            "Jamshoro District",
            "Tando Allahyar District",
            "Tando Muhammad Khan District",
            "Thatta",
            "Badin District",
            "Sujawal District",
        ],
        "https://www.bisehyd.edu.pk",
    ),
    _board(
        "bise-karachi-intermediate",
        "Board of Intermediate Education, Karachi",
        BoardType.MATRIC,
        Province.SINDH,
        1974,
        ["Karachi Division"],
        "https://www.biek.edu.pk",
    ),
    _board(
        "bise-karachi-secondary",
        "Board of Secondary Education, Karachi",
        BoardType.MATRIC,
        Province.SINDH,
        1950,
        ["Karachi Division"],
        "https://www.bsek.edu.pk",
    ),
    _bise(
        "bise-larkana",
        "Larkana",
        Province.SINDH,
        1995,
        ["Larkana Division"],
        "https://www.biselarkana.edu.pk",
    ),
    _bise(
        "bise-mirpur-khas",
        "Mirpur Khas",
        Province.SINDH,
        1973,
        ["Mirpur Khas Division", "Sanghar District"],
        "https://www.bisemirpurkhas.edu.pk",
    ),
    _bise(
        "bise-sukkur",
        "Sukkur",
        Province.SINDH,
        1979,
        ["Sukkur District", "Khairpur", "District Ghotki"],
        "https://www.bisesukkur.edu.pk",
    ),
    _bise(
        "bise-shaheed-benazirabad",
        "Shaheed Benazirabad",
        Province.SINDH,
        2015,
        [
            "Shaheed Benazirabad District",
            "Sanghar District",
            "Dadu District",
            "Naushahro Feroze District",
        ],
    ),
    # Khyber Pakhtunkhwa
    _bise(
        "bise-abbottabad",
        "Abbottabad",
        Province.KPK,
        1990,
        [
            "Abbottabad District",
            "Mansehra District",
            "Haripur District",
            "Upper Kohistan District",
            "Lower Kohistan District",
            "Torghar District",
            "Battagram District",
        ],
        "https://www.biseabbottabad.edu.pk",
    ),
    _bise(
        "bise-bannu",
        "Bannu",
        Province.KPK,
        1990,
        ["Bannu Division"],
        "https://www.bisebannu.edu.pk",
    ),
    _bise(
        "bise-dik",
        "Dera Ismail Khan",
        Province.KPK,
        2006,
        ["Dera Ismail Khan Division"],
        "https://www.bisedik.edu.pk",
    ),
    _bise(
        "bise-kohat",
        "Kohat",
        Province.KPK,
        2002,
        ["Kohat Division"],
        "https://www.bisekohat.edu.pk",
    ),
    _bise(
        "bise-malakand",
        "Malakand",
        Province.KPK,
        1961,
        [
            "Swat District",
            "Malakand District",
            "Upper Dir District",
            "Lower Dir District",
            "Bajaur District",
        ],
        "https://www.bisemalakand.edu.pk",
    ),
    _bise(
        "bise-mardan",
        "Mardan",
        Province.KPK,
        1975,
        ["Mardan District", "Swabi District", "Nowshera District"],
        "https://www.bisemardan.edu.pk",
    ),
    _bise(
        "bise-peshawar",
        "Peshawar",
        Province.KPK,
        1961,
        [
            "Peshawar District",
            "Charsadda District",
            "Upper Chitral District",
            "Lower Chitral District",
            "Khyber District",
        ],
        "https://www.bisep.edu.pk",
    ),
    _bise(
        "bise-swat",
        "Swat",
        Province.KPK,
        1992,
        ["Swat District", "Shangla District", "Buner District"],
        "https://www.biseswat.edu.pk",
    ),
    # Balochistan
    _bise(
        "bise-quetta",
        "Quetta",
        Province.BALOCHISTAN,
        1976,
        [
            "Quetta Division",
            "Zhob Division",
            "Sibi Division",
            "Loralai Division",
            "Nasirabad Division",
        ],
        "https://www.bisebalochistan.edu.pk",
    ),
    _bise("bise-khuzdar", "Khuzdar", Province.BALOCHISTAN, 2020, ["Kalat Division"]),
    _bise(
        "bise-turbat",
        "Turbat",
        Province.BALOCHISTAN,
        2020,
        ["Makran Division", "Rakhshan Division"],
    ),
    # Azad Jammu and Kashmir
    _board(
        "bise-mirpur-ajk",
        "Board of Intermediate and Secondary Education, Mirpur (AJK)",
        BoardType.MATRIC,
        Province.AJK,
        1973,
        ["Azad Jammu and Kashmir"],
        "https://www.bisemirpur.edu.pk",
    ),
    # O Level boards (examine nationwide; listed under their Pakistan office)
    _board(
        "cambridge-o-levels",
        "Cambridge International Examinations (O Levels)",
        BoardType.O_LEVEL,
        Province.ISLAMABAD,
        1858,
        ["Pakistan (National)"],
        "https://www.cambridgeinternational.org",
    ),
    _board(
        "edexcel-o-levels",
        "Edexcel International (O Levels)",
        BoardType.O_LEVEL,
        Province.ISLAMABAD,
        1996,
        ["Pakistan (National)"],
        "https://qualifications.pearson.com",
    ),
    _board(
        "akueb",
        "Aga Khan University Examination Board",
        BoardType.BOTH,
        Province.SINDH,
        2003,
        ["Pakistan (National)"],
        "https://www.akueb.edu.pk",
    ),
)

_MATRIC_CORE = ["Urdu", "English", "Islamiyat", "Pakistan Studies"]

MATRIC_SUBJECT_GROUPS: tuple[SubjectGroup, ...] = (
    SubjectGroup(
        id="matric-science",
        name="Science Group",
        education_type=EducationType.MATRIC,
        board_type=[BoardType.MATRIC, BoardType.BOTH],
        subjects=[*_MATRIC_CORE, "Mathematics", "Physics", "Chemistry", "Biology"],
    ),
    SubjectGroup(
        id="matric-arts",
        name="Arts Group",
        education_type=EducationType.MATRIC,
        board_type=[BoardType.MATRIC, BoardType.BOTH],
        subjects=[*_MATRIC_CORE, "History", "Geography", "Economics", "Civics"],
    ),
    SubjectGroup(
        id="matric-computer-science",
        name="Computer Science Group",
        education_type=EducationType.MATRIC,
        board_type=[BoardType.MATRIC, BoardType.BOTH],
        subjects=[*_MATRIC_CORE, "Mathematics", "Physics", "Chemistry", "Computer Science"],
    ),
)

O_LEVEL_SUBJECT_GROUPS: tuple[SubjectGroup, ...] = (
    SubjectGroup(
        id="o-level-core",
        name="Core Subjects",
        education_type=EducationType.O_LEVEL,
        board_type=[BoardType.O_LEVEL, BoardType.BOTH],
        subjects=["English Language", "Mathematics", "Urdu", "Islamiyat", "Pakistan Studies"],
        is_compulsory=True,
    ),
    SubjectGroup(
        id="o-level-sciences",
        name="Science Subjects",
        education_type=EducationType.O_LEVEL,
        board_type=[BoardType.O_LEVEL, BoardType.BOTH],
        subjects=["Physics", "Chemistry", "Biology", "Computer Science", "Environmental Management"],
    ),
    SubjectGroup(
        id="o-level-humanities",
        name="Humanities & Social Sciences",
        education_type=EducationType.O_LEVEL,
        board_type=[BoardType.O_LEVEL, BoardType.BOTH],
        subjects=["History", "Geography", "Economics", "Business Studies", "Sociology"],
    ),
    SubjectGroup(
        id="o-level-languages",
        name="Languages",
        education_type=EducationType.O_LEVEL,
        board_type=[BoardType.O_LEVEL, BoardType.BOTH],
        subjects=["French", "Arabic", "German", "Chinese", "Spanish"],
    ),
    SubjectGroup(
        id="o-level-arts",
        name="Arts & Creative",
        education_type=EducationType.O_LEVEL,
        board_type=[BoardType.O_LEVEL, BoardType.BOTH],
        subjects=["Art & Design", "Music", "Drama", "Media Studies"],
    ),
)

GRADE_LEVELS: dict[EducationType, tuple[GradeLevel, ...]] = {
    EducationType.MATRIC: (
        GradeLevel(id="grade-6", name="Grade 6", level=6),
        GradeLevel(id="grade-7", name="Grade 7", level=7),
        GradeLevel(id="grade-8", name="Grade 8", level=8),
        GradeLevel(id="grade-9", name="Grade 9", level=9),
        GradeLevel(id="grade-10", name="Grade 10 (Matric)", level=10),
    ),
    EducationType.O_LEVEL: (
        GradeLevel(id="o1", name="O Level Year 1", level=9),
        GradeLevel(id="o2", name="O Level Year 2", level=10),
        GradeLevel(id="o3", name="O Level Year 3", level=11),
    ),
}
