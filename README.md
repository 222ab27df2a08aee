# culiacan

The simulation core of a real-time strategy game: game rules and state as a plain
Python library with no runtime dependencies.

## Modules

- `culiacan.model`: `GamePhase`, `Faction`, `UnitType`, `GameState` (with
  `to_dict` / `from_dict`), `AiDirector`, `IntelSystem`, `SaveData` and
  `not_in_menu_phase`, which is false in the main, save and load menus and after
  victory or defeat.
- `culiacan.saves`: the campaign timeline (`MissionId`, `DifficultyLevel`,
  `CampaignProgress`) and JSON save slots through `SaveStore`. There are ten slots,
  numbered 0 to 9. A bad slot number raises `SaveSlotError`, and so does a corrupt
  file. `SaveStore()` keeps its files under `default_save_root()`, which is
  `~/.culiacan-rts/saves`. You can also pass a directory of your own.
  `AutoSaveTimer.tick` writes slot 0 once per interval. The default interval is 60 s.
- `culiacan.political_state`: `PoliticalState`, `SocialMediaInfluence`, the
  politicians and events, `response_level_for` and `status_panel`, which returns
  the status lines as `(text, colour name)` pairs.
- `culiacan.politics`: `PoliticalSimulation`, which advances political will,
  stability, public opinion, media coverage and international pressure. If the
  government gives in, `decide` sets the game phase to `GamePhase.VICTORY`.
- `culiacan.hud`: status, wave, score and difficulty lines, and the colour and
  width of health bars.
- `culiacan.multiplayer`: `MultiplayerSession`, which handles lobby messages, role
  assignment, automatic start and ping checks. It also builds state-sync snapshots
  and panel lines. `player_ping` gives a stable simulated ping.
- `culiacan.pathing`: `Vec3`, `generate_simple_path`, which sets a waypoint every
  50 units and steps around obstacles, `avoidance_force`, `PathfindingAgent.step`
  and `apply_ability_effect`.
- `culiacan.formations`: formation offsets for line, circle, wedge, flanking,
  overwatch and retreat, and click picking of cartel or military units within 50 units.
- `culiacan.view`: `SpriteAnimation`, `BobAnimation` and `IsometricCamera`
  (WASD pan, wheel zoom clamped to its limits).
- `culiacan.minimap`: `minimap_position` and `minimap_color`.

## Example

```python
from culiacan.model import GameState
from culiacan.saves import CampaignProgress, MissionId, SaveStore

campaign = CampaignProgress()
campaign.complete_mission(MissionId.INITIAL_RAID, 120.0, 500)
assert campaign.is_mission_unlocked(MissionId.URBAN_WARFARE)

store = SaveStore("saves")
store.save(GameState(), campaign, 0)
for info in store.list_saves():
    print(info.display_text())
```

The political model runs one tick at a time:

```python
from culiacan.model import GameState
from culiacan.politics import PoliticalSimulation

sim = PoliticalSimulation()
state = GameState()
sim.step(0.016, 0.016, state, cartel_units=4, military_units=6)
```

## What it does not do

The package does not open windows, draw anything, read the keyboard or mouse, or
play sound. There is no command to start a game.

Units are not spawned, and combat is not resolved. Callers pass in positions,
factions and health.

The multiplayer session has no network transport. It hands each outgoing message
to the `sender` callable you give it, and it reads incoming messages from its
`inbox` queue.

## Tests

The tests use pytest. It is available as the `test` extra.