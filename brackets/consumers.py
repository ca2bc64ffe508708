import json

from asgiref.sync import sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from .models import Match
from .projection import MATCH_RELATED, serializer_context
from .serializers import MatchSerializer


class BracketConsumer(AsyncWebsocketConsumer):
    async def connect(self):
        self.tournament_id = self.scope["url_route"]["kwargs"]["tournament_id"]
        self.group_name = f"tournament_{self.tournament_id}"
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def bracket_update(self, event):
        match_id = event["match_id"]
        payload = await self.get_match_payload(match_id)

        await self.send(
            text_data=json.dumps(
                {
                    "type": "bracket_update",
                    "match_id": match_id,
                    "match": payload,
                }
            )
        )

    async def bracket_generated(self, event):
        await self.send(
            text_data=json.dumps(
                {
                    "type": "bracket_generated",
                    "tournament_id": event["tournament_id"],
                    "bracket_id": event["bracket_id"],
                }
            )
        )

    @sync_to_async
    def get_match_payload(self, match_id):
        match = Match.objects.select_related("bracket", *MATCH_RELATED).get(pk=match_id)
        return MatchSerializer(match, context=serializer_context(match.bracket)).data
