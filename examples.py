"""Example usage of bpmnview."""

import asyncio
from pathlib import Path

from bpmnview import (
    Viewer,
    annotation,
    data_store,
    document,
    event,
    flow,
    gateway,
    lane,
    pool,
    task,
)


def restaurant_document():
    """A two-pool collaboration: guests order, the kitchen cooks."""
    with document() as doc:
        with pool("Guest", name="Guest", x=0, y=0, width=800, height=200):
            hungry = event("Hungry", name="Hungry", x=80, y=82)
            order = task("Order", name="Order food", x=160, y=60)
            eat = task("Eat", name="Eat", x=560, y=60)
            full = event("Full", name="Full", kind="EndEvent", x=700, y=82)

        with pool("Restaurant", name="Restaurant", x=0, y=260, width=800, height=320):
            lane("Front", name="Front desk", x=30, y=260, width=770, height=140)
            lane("Kitchen", name="Kitchen", x=30, y=400, width=770, height=180)
            take = task("Take", name="Take order", x=160, y=290)
            check = gateway("InStock", name="In stock?", x=330, y=305)
            cook = task("Cook", name="Cook", x=440, y=450)
            serve = task("Serve", name="Serve", x=560, y=290)
            pantry = data_store("Pantry", name="Pantry", x=330, y=470)

        note = annotation("Rush", "Busy between 12 and 2", x=600, y=5)

        hungry >> order
        eat >> full
        take >> check
        check >> cook
        cook >> serve
        flow(order, take, kind="MessageFlow", name="order")
        flow(serve, eat, kind="MessageFlow", name="meal")
        flow(pantry, cook, kind="DataInputAssociation")
        flow(note, order, kind="Association")
    return doc


async def main():
    Path("output").mkdir(exist_ok=True)
    viewer = Viewer()
    await viewer.import_document(restaurant_document())

    # Name every kind of element once
    viewer.add_overlays(viewer.select_all_first_elems())
    viewer.save_svg("output/restaurant_overview.svg")
    viewer.remove_overlays()

    # Focus on the guest: hide the restaurant lanes and everything in them
    restaurant = [e for e in viewer.select_elements("Task") if e.parent.id == "Restaurant"]
    restaurant += viewer.select_elements("ExclusiveGateway")
    restaurant += viewer.groups.data_stores + viewer.groups.lanes
    restaurant += [viewer.get("Restaurant")]
    viewer.remove_elements(restaurant)
    viewer.highlight_element(viewer.get("Guest"))
    viewer.reset_viewport()
    viewer.save_svg("output/restaurant_guest.svg")

    # Bring everything back
    viewer.add_elements(restaurant)
    viewer.remove_highlight_element(viewer.get("Guest"))
    viewer.reset_viewport()
    viewer.save_svg("output/restaurant_full.svg")

    print("Diagrams saved to output/")


if __name__ == "__main__":
    asyncio.run(main())
