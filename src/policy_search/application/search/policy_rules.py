"""
Policy rule tables.

Fixed, process-wide read-only data used by the query builder and the
relevance scorer. Domains are lowercase literals matched as substrings.
"""

from __future__ import annotations

# Government domain whitelist
GOVERNMENT_DOMAINS: tuple[str, ...] = (
    "gov.cn",  # all Chinese government sites
    "jiangxi.gov.cn",  # Jiangxi provincial government
    "www.gov.cn",  # State Council
    "miit.gov.cn",  # Ministry of Industry and Information Technology
    "ndrc.gov.cn",  # National Development and Reform Commission
    "mof.gov.cn",  # Ministry of Finance
    "most.gov.cn",  # Ministry of Science and Technology
    "mct.gov.cn",  # Ministry of Culture and Tourism
)

# Policy document keywords (policy, notice, announcement, measures, regulation,
# opinion, scheme, plan, ordinance, guidance, measure, document)
POLICY_KEYWORDS: tuple[str, ...] = (
    "政策",
    "通知",
    "公告",
    "办法",
    "规定",
    "意见",
    "方案",
    "计划",
    "条例",
    "指导",
    "措施",
    "文件",
)

# Default qualifier appended to keywords without any policy term
POLICY_QUALIFIER = "政策"

# Markers in the "source" label that identify a government publisher
GOVERNMENT_SOURCE_MARKERS: tuple[str, ...] = ("政府", "gov", "人民政府")

# Wider set used for the institution bonus (adds ministry abbreviations)
INSTITUTION_SOURCE_MARKERS: tuple[str, ...] = (
    *GOVERNMENT_SOURCE_MARKERS,
    "发改委",
    "工信部",
    "科技部",
)

# Engine tag suffix and description label added by the ranking pipeline
POLICY_ENGINE_SUFFIX = "-policy"
SCORE_LABEL_TEMPLATE = "[政策相关度: {score}分] "

MAX_SCORE = 100
GOVERNMENT_POINTS = 50
TITLE_KEYWORD_POINTS = 10
TITLE_KEYWORD_CAP = 30
DESCRIPTION_KEYWORD_POINTS = 10
INSTITUTION_SOURCE_POINTS = 10
