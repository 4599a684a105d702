"""
Server instructions shown to AI agents.
"""

SERVER_INSTRUCTIONS = """
Policy Search MCP - web and government policy document search (no API keys).

TOOLS
  search                 Generic web search over baidu / bing / duckduckgo.
                         The limit is split across the requested engines.
  searchPolicy           Policy document search over baidu + bing.
                         The keyword gets a "政策" qualifier unless it already
                         names a document type (通知, 办法, 计划 ...), the region
                         is prepended, results are scored 0-100 for policy
                         relevance, filtered by minScore, deduplicated by URL
                         and sorted by score.
  searchPolicyAdvanced   Restrict to a site (site:www.gov.cn) and/or a file
                         type (filetype:pdf). Results are not scored.

SCORING (searchPolicy)
  +50  government site (gov.cn, ndrc.gov.cn, miit.gov.cn, ...)
  +10  per policy keyword in the title (max +30)
  +10  policy keyword in the description
  +10  source names a government institution

TIPS
  - Use region="江西省" rather than putting the region in the keyword.
  - governmentOnly=true keeps official sites only.
  - Lower minScore (e.g. 0) when results come back empty.
  - Each result title starts with "[政策相关度: N分]".
"""
