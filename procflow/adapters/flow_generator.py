"""Client for the free-text to flow-diagram collaborator."""

from typing import Any

from pydantic import Field, ValidationError

from procflow.adapters.openai_client import JsonChatClient
from procflow.errors import CollaboratorError
from procflow.models.flow import ProcessEdge, ProcessNode, WireModel

SYSTEM_PROMPT = """あなたはBPMNフロー図を生成するアシスタントです。
ユーザーが提供するマニュアルや手順書のテキストを解析し、BPMNフロー図用のノードとエッジのJSONデータを生成してください。

利用可能なノードタイプ:
- start: 開始イベント（フローの開始点）
- end: 終了イベント（フローの終了点）
- intermediate: 中間イベント（待機など）
- task: 一般タスク
- userTask: ユーザータスク（人間が行う作業）
- serviceTask: サービスタスク（システムが行う作業）
- scriptTask: スクリプトタスク（自動処理）
- exclusiveGateway: 排他ゲートウェイ（分岐・条件判断）
- parallelGateway: 並列ゲートウェイ（並行処理）
- inclusiveGateway: 包含ゲートウェイ（複数条件）
- wait: 待機
- subprocess: サブプロセス

レスポンス形式:
{
  "flowName": "フロー名",
  "nodes": [
    {
      "id": "node-1",
      "type": "processNode",
      "position": { "x": 400, "y": 50 },
      "data": {
        "label": "ラベル",
        "nodeType": "start",
        "assignee": "担当者（任意）",
        "duration": 所要時間（分、任意）,
        "description": "説明（任意）"
      }
    }
  ],
  "edges": [
    {
      "id": "edge-1",
      "source": "node-1",
      "target": "node-2",
      "label": "ラベル（任意）"
    }
  ]
}

ルール:
1. 必ずstartノードで開始し、endノードで終了する
2. ノードは縦方向に配置（y座標を100-120ずつ増加）
3. ゲートウェイ後の分岐はx座標を調整して並列配置
4. 「承認」「確認」「判断」→ exclusiveGateway
5. 「並行して」「同時に」→ parallelGateway
6. 「待つ」「待機」→ wait
7. 人の作業 → userTask、システム処理 → serviceTask
8. 所要時間は妥当な値を推定（分単位）
9. 担当者や部署名があれば assignee に設定"""


class GeneratedFlow(WireModel):
    """A complete graph proposed by the generator."""

    flow_name: str | None = Field(default=None, alias="flowName")
    nodes: list[ProcessNode]
    edges: list[ProcessEdge]


def parse_generated_flow(payload: dict[str, Any]) -> GeneratedFlow:
    """Validate a generator response.

    Raises:
        CollaboratorError: if ``nodes``/``edges`` are missing or malformed.
    """
    if not isinstance(payload.get("nodes"), list):
        raise CollaboratorError("Invalid nodes format")
    if not isinstance(payload.get("edges"), list):
        raise CollaboratorError("Invalid edges format")
    try:
        return GeneratedFlow.model_validate(payload)
    except ValidationError as exc:
        raise CollaboratorError(
            f"generated flow does not match the node/edge schema: {exc.error_count()} error(s)",
            context={"errors": exc.errors(include_url=False)},
        ) from exc


class FlowGenerator:
    """Turns a manual or procedure description into a flow graph."""

    def __init__(self, chat: JsonChatClient | None = None) -> None:
        self.chat = chat or JsonChatClient(temperature=0.3)

    async def generate(self, text: str) -> GeneratedFlow:
        if not text or not text.strip():
            raise CollaboratorError("Text is required")
        payload = await self.chat.complete_json(
            SYSTEM_PROMPT,
            f"以下のマニュアル/手順書をBPMNフロー図に変換してください:\n\n{text}",
        )
        return parse_generated_flow(payload)
