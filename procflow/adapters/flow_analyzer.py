"""Client for the bottleneck-analysis collaborator."""

from typing import Any

from pydantic import ValidationError

from procflow.adapters.openai_client import JsonChatClient
from procflow.errors import CollaboratorError
from procflow.models.analysis import AnalysisResult
from procflow.models.flow import ProcessEdge, ProcessNode

SYSTEM_PROMPT = "あなたは業務プロセス改善の専門家です。JSONのみを出力してください。"

ANALYSIS_PROMPT = """あなたは業務プロセス改善の専門家です。以下の業務フローを分析し、ボトルネックと改善提案を提供してください。

## 業務フロー情報
{flow_description}

## 分析タスク
1. フロー全体のサマリーを1-2文で記述
2. ボトルネック（遅延の原因となるステップ）を特定
3. 改善提案を具体的に列挙

## 出力形式
以下のJSON形式で回答してください：
{{
  "summary": "フロー全体のサマリー（1-2文）",
  "totalDuration": 総所要時間（分、数値のみ）,
  "bottlenecks": [
    {{
      "nodeId": "ボトルネックのノードID",
      "nodeName": "ノード名",
      "reason": "ボトルネックの理由",
      "suggestion": "改善案"
    }}
  ],
  "improvements": [
    {{
      "category": "自動化" | "統合" | "削除" | "並列化" | "その他",
      "description": "改善の具体的な説明",
      "impact": "high" | "medium" | "low"
    }}
  ]
}}

注意：
- bottlenecksは所要時間が長いステップ、待機時間が長いステップを優先
- improvementsは実現可能性と効果のバランスを考慮
- 必ず有効なJSONのみを出力してください（説明文なし）"""


def describe_flow(nodes: list[ProcessNode], edges: list[ProcessEdge], flow_name: str) -> str:
    """Render a flow as the plain-text brief sent to the analyzer."""
    lines = [f"フロー名: {flow_name}", "", "### ステップ一覧"]
    for index, node in enumerate(nodes, start=1):
        data = node.data
        line = f"{index}. [{data.node_type.value}] {data.label} (ID: {node.id})"
        if data.assignee:
            line += f" - 担当: {data.assignee}"
        if data.duration:
            line += f" - 所要時間: {data.duration}分"
        if data.description:
            line += f"\n   説明: {data.description}"
        if data.issues:
            line += f"\n   課題: {', '.join(data.issues)}"
        lines.append(line)

    lines += ["", "### フローの流れ"]
    by_id = {node.id: node for node in nodes}
    for edge in edges:
        source = by_id.get(edge.source)
        target = by_id.get(edge.target)
        if source is None or target is None:
            continue
        line = f"- {source.data.label} → {target.data.label}"
        if edge.display_label:
            line += f" ({edge.display_label})"
        lines.append(line)

    total_duration = sum(node.data.duration or 0 for node in nodes)
    lines += [
        "",
        "### 統計",
        f"- 総ステップ数: {len(nodes)}",
        f"- 総所要時間: {total_duration}分",
    ]
    return "\n".join(lines) + "\n"


def parse_analysis(payload: dict[str, Any]) -> AnalysisResult:
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        raise CollaboratorError(
            f"analysis response does not match the report schema: {exc.error_count()} error(s)",
            context={"errors": exc.errors(include_url=False)},
        ) from exc


class FlowAnalyzer:
    """Asks the model for bottlenecks and improvement ideas."""

    def __init__(self, chat: JsonChatClient | None = None) -> None:
        self.chat = chat or JsonChatClient(temperature=0.7)

    async def analyze(
        self,
        nodes: list[ProcessNode],
        edges: list[ProcessEdge],
        flow_name: str,
    ) -> AnalysisResult:
        if not nodes:
            raise CollaboratorError("ノードがありません")
        prompt = ANALYSIS_PROMPT.format(flow_description=describe_flow(nodes, edges, flow_name))
        payload = await self.chat.complete_json(SYSTEM_PROMPT, prompt)
        return parse_analysis(payload)
