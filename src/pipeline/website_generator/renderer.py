"""Page rendering for the static electrolysis directory.

This module turns projected directory records into complete HTML documents:
one page per business, city, state and category, plus the human-readable
sitemap pages. It only builds strings; writing them to disk is the job of
``writer.py``.

System Boundaries
-----------------
- Accepts projections from ``src.pipeline.directory_data``; never resolves
  or counts anything itself.
- Layouts come from ``templates/`` through ``templating.py``; record values
  are HTML-escaped here before substitution.
- Missing values render as empty strings or placeholder text, never errors.

Example
-------
>>> from src.pipeline.website_generator import renderer
>>> page = renderer.render_company_page(
...     {"id": "1", "title": "Smooth Skin", "slug": "x", "category_ids": []}, {}
... )
>>> "<h1>Smooth Skin</h1>" in page
True
"""

import html
import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from src.config import (
    FEATURED_PROVIDERS_LIMIT,
    HTML_SITEMAP_CITY_LIMIT,
    NEARBY_CITIES_LIMIT,
    SITE_CONTACT_EMAIL,
    SITE_CONTACT_PHONE,
    SITE_NAME,
    SITE_TAGLINE,
)

from .formatting import (
    display_website,
    format_opening_hours,
    format_phone_number,
    format_services,
    has_coordinates,
    render_description_html,
    render_star_rating,
    truncate_text,
)
from .templating import render_named_template

Projection = Mapping[str, Any]


def _e(value: Any) -> str:
    return html.escape(str(value or ""))


def render_layout(
    title: str,
    description: str,
    content: str,
    *,
    site_name: str = SITE_NAME,
    head_extra: str = "",
    footer_script: str = "",
    year: int | None = None,
) -> str:
    r"""Wrap a page body in the shared header, navigation and footer.

    Parameters
    ----------
    title : str
        Page title (unescaped).
    description : str
        Meta description (unescaped).
    content : str
        Body HTML, inserted verbatim.
    site_name : str, optional
        Display name of the site.
    head_extra, footer_script : str, optional
        Extra HTML for ``<head>`` and the end of ``<body>`` (map assets).
    year : int or None, optional
        Copyright year; defaults to the current year.

    Returns
    -------
    str
        Complete HTML document.
    """
    return render_named_template(
        "layout.html",
        {
            "PageTitle": _e(title),
            "MetaDescription": _e(description),
            "SiteName": _e(site_name),
            "SiteTagline": _e(SITE_TAGLINE),
            "ContactEmail": _e(SITE_CONTACT_EMAIL),
            "ContactPhone": _e(SITE_CONTACT_PHONE),
            "HeadExtra": head_extra,
            "Content": content,
            "FooterScript": footer_script,
            "Year": str(year if year is not None else datetime.now().year),
        },
    )


def _location_label(city_name: str, state_name: str) -> str:
    if city_name and state_name:
        return f"{city_name}, {state_name}"
    return city_name or state_name


def _contact_item(icon: str, label: str, body_html: str) -> str:
    return (
        f'<div class="contact-item"><i class="fas {icon}"></i><div>'
        f'<p class="font-semibold">{label}:</p><p>{body_html}</p></div></div>'
    )


def render_company_page(
    business: Projection,
    categories_by_id: Mapping[str, Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render the detail page of one business.

    Parameters
    ----------
    business : Mapping[str, Any]
        Business projection.
    categories_by_id : Mapping[str, Mapping[str, Any]]
        Category projections by id, for the category tags.

    Returns
    -------
    str
        Complete HTML document. A Leaflet map is included only when the
        business has valid coordinates.
    """
    title = business.get("title", "")
    telephone = business.get("telephone", "")
    website = business.get("website", "")
    email = business.get("email", "")
    address = business.get("address", "")
    postal_code = business.get("postal_code", "")
    latitude = business.get("latitude", "")
    longitude = business.get("longitude", "")
    with_map = has_coordinates(latitude, longitude)

    location = _location_label(
        business.get("city_name", ""), business.get("state_name", "")
    )
    location_html = (
        '<div class="location"><i class="fas fa-map-marker-alt"></i>'
        f"<span>{_e(location)}</span></div>"
        if location
        else ""
    )
    category_names = [
        categories_by_id[category_id].get("category", "")
        for category_id in business.get("category_ids", [])
        if category_id in categories_by_id
    ]
    category_tags_html = (
        '<div class="category-tags">'
        + "".join(f'<span class="category-tag">{_e(name)}</span>' for name in category_names)
        + "</div>"
        if category_names
        else ""
    )

    phone_href = _e(telephone)
    phone_display = _e(format_phone_number(telephone))
    phone_meta_html = (
        '<div class="meta-item"><i class="fas fa-phone"></i>'
        f'<a href="tel:{phone_href}">{phone_display}</a></div>'
        if telephone
        else ""
    )
    average_star = business.get("average_star", "")
    rating_meta_html = (
        f'<div class="meta-item"><div class="star-rating">{render_star_rating(average_star)}</div>'
        f"<span>({_e(business.get('reviews') or '0')} reviews)</span></div>"
        if average_star
        else ""
    )

    service_product = business.get("service_product", "")
    services_html = (
        '<div class="business-services"><h2>Services &amp; Treatments</h2>'
        f"<ul>{format_services(service_product)}</ul></div>"
        if service_product
        else ""
    )
    map_section_html = (
        '<div class="business-map"><h2>Location</h2>'
        '<div id="map" style="height: 300px; border-radius: 0.5rem;"></div></div>'
        if with_map
        else ""
    )

    contact_items: list[str] = []
    if address:
        full_address = f"{address}, {postal_code}" if postal_code else address
        contact_items.append(
            _contact_item("fa-map-marker-alt", "Address", _e(full_address))
        )
    if telephone:
        contact_items.append(
            _contact_item(
                "fa-phone",
                "Phone",
                f'<a href="tel:{phone_href}">{phone_display}</a>',
            )
        )
    if email:
        contact_items.append(
            _contact_item(
                "fa-envelope", "Email", f'<a href="mailto:{_e(email)}">{_e(email)}</a>'
            )
        )
    if website:
        contact_items.append(
            _contact_item(
                "fa-globe",
                "Website",
                f'<a href="{_e(website)}" target="_blank" rel="noopener">'
                f"{_e(display_website(website))}</a>",
            )
        )

    if telephone:
        call_to_action_html = (
            f'<a href="tel:{phone_href}" class="cta-button">'
            '<i class="fas fa-phone-alt mr-2"></i> Call Now</a>'
        )
    elif website:
        call_to_action_html = (
            f'<a href="{_e(website)}" target="_blank" rel="noopener" class="cta-button">'
            '<i class="fas fa-globe mr-2"></i> Visit Website</a>'
        )
    else:
        call_to_action_html = ""

    opening_hours = business.get("opening_hours", "")
    hours_html = (
        '<h3 class="mt-6">Business Hours</h3>'
        f'<div class="hours">{format_opening_hours(opening_hours)}</div>'
        if opening_hours
        else ""
    )

    content = render_named_template(
        "company.html",
        {
            "Title": _e(title),
            "LocationHtml": location_html,
            "CategoryTagsHtml": category_tags_html,
            "PhoneMetaHtml": phone_meta_html,
            "RatingMetaHtml": rating_meta_html,
            "DescriptionHtml": render_description_html(business.get("description")),
            "ServicesHtml": services_html,
            "MapSectionHtml": map_section_html,
            "ContactItemsHtml": "".join(contact_items),
            "CallToActionHtml": call_to_action_html,
            "HoursHtml": hours_html,
        },
    )

    head_extra = ""
    footer_script = ""
    if with_map:
        head_extra = render_named_template("map_head.html", {})
        # "</" must not appear verbatim inside a <script> element
        popup = json.dumps(f"<strong>{_e(title)}</strong>").replace("</", "<\\/")
        footer_script = render_named_template(
            "map_script.html",
            {
                "Latitude": str(float(latitude)),
                "Longitude": str(float(longitude)),
                "MarkerPopup": popup,
            },
        )

    return render_layout(
        title,
        business.get("description")
        or f"Professional electrolysis services at {title}",
        content,
        site_name=site_name,
        head_extra=head_extra,
        footer_script=footer_script,
        year=year,
    )


def render_provider_card(business: Projection) -> str:
    """Render the summary card of a business used on listing pages."""
    slug = _e(business.get("slug", ""))
    telephone = business.get("telephone", "")
    phone_html = (
        f'<p><strong>Phone:</strong> <a href="tel:{_e(telephone)}">'
        f"{_e(format_phone_number(telephone))}</a></p>"
        if telephone
        else ""
    )
    return (
        '<div class="provider-card">'
        f'<h3><a href="/companies/{slug}/">{_e(business.get("title", ""))}</a></h3>'
        f"<p>{_e(business.get('address', ''))}</p>"
        f"{phone_html}"
        f"<p>{_e(truncate_text(business.get('description')))}</p>"
        f'<a href="/companies/{slug}/" class="view-details">View Details</a>'
        "</div>"
    )


def _no_providers_html(place: str) -> str:
    return (
        '<div class="no-providers"><p>We currently don\'t have any electrolysis '
        f"providers listed in {_e(place)}. Are you a provider in this area? "
        '<a href="/add-listing/">Add your business</a> to our directory.</p></div>'
    )


def render_city_page(
    city: Projection,
    city_businesses: Sequence[Projection],
    cities: Sequence[Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render a city listing page with its providers and nearby cities.

    Nearby cities are up to five other cities sharing the city's state id,
    in collection order.
    """
    name = city.get("city", "")
    state_name = city.get("state_name", "")
    if city_businesses:
        providers_html = (
            '<div class="provider-list">'
            + "".join(render_provider_card(business) for business in city_businesses)
            + "</div>"
        )
    else:
        providers_html = _no_providers_html(name)
    nearby = [
        other
        for other in cities
        if other.get("state_id") == city.get("state_id")
        and other.get("id") != city.get("id")
    ][:NEARBY_CITIES_LIMIT]
    nearby_html = "".join(
        f'<li><a href="/cities/{_e(other.get("slug"))}/">{_e(other.get("city"))}</a></li>'
        for other in nearby
    )
    content = render_named_template(
        "city.html",
        {
            "CityName": _e(name),
            "StateName": _e(state_name),
            "ProviderCount": str(len(city_businesses)),
            "ProvidersHtml": providers_html,
            "NearbyCitiesHtml": nearby_html,
        },
    )
    return render_layout(
        f"{name}, {state_name}",
        f"Find electrolysis and permanent hair removal services in {name}, {state_name}.",
        content,
        site_name=site_name,
        year=year,
    )


def render_state_page(
    state: Projection,
    state_cities: Sequence[Projection],
    state_businesses: Sequence[Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render a state page: its cities with provider counts and featured providers."""
    name = state.get("state", "")
    city_cards_html = "".join(
        '<div class="city-card">'
        f'<h3><a href="/cities/{_e(city.get("slug"))}/">{_e(city.get("city"))}</a></h3>'
        f"<p>{len(city.get('salon_ids', []))} providers</p></div>"
        for city in state_cities
    )
    if state_businesses:
        featured = state_businesses[:FEATURED_PROVIDERS_LIMIT]
        cards = "".join(
            '<div class="provider-card featured">'
            f'<h3><a href="/companies/{_e(business.get("slug"))}/">{_e(business.get("title"))}</a></h3>'
            f"<p>{_e(business.get('city_name', ''))}, {_e(name)}</p>"
            + (
                f'<p><strong>Phone:</strong> <a href="tel:{_e(business.get("telephone"))}">'
                f"{_e(format_phone_number(business.get('telephone')))}</a></p>"
                if business.get("telephone")
                else ""
            )
            + f'<a href="/companies/{_e(business.get("slug"))}/" class="view-details">View Details</a>'
            "</div>"
            for business in featured
        )
        featured_html = f'<div class="provider-list featured">{cards}</div>'
        if len(state_businesses) > FEATURED_PROVIDERS_LIMIT:
            featured_html += (
                '<div class="view-all"><p>Showing '
                f"{FEATURED_PROVIDERS_LIMIT} of {len(state_businesses)} providers in "
                f"{_e(name)}.</p></div>"
            )
    else:
        featured_html = _no_providers_html(name)
    content = render_named_template(
        "state.html",
        {
            "StateName": _e(name),
            "ProviderCount": str(len(state_businesses)),
            "CityCount": str(len(state_cities)),
            "CityCardsHtml": city_cards_html,
            "FeaturedProvidersHtml": featured_html,
        },
    )
    return render_layout(
        name,
        f"Find electrolysis and permanent hair removal services in {name}.",
        content,
        site_name=site_name,
        year=year,
    )


def render_category_page(
    category: Projection,
    category_businesses: Sequence[Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render a category page listing every business in the category."""
    name = category.get("category", "")
    if category_businesses:
        providers_html = (
            '<div class="provider-list">'
            + "".join(render_provider_card(business) for business in category_businesses)
            + "</div>"
        )
    else:
        providers_html = (
            '<div class="no-providers"><p>No providers are listed in this category yet. '
            '<a href="/add-listing/">Add your business</a> to our directory.</p></div>'
        )
    content = render_named_template(
        "category.html",
        {
            "CategoryName": _e(name),
            "ProviderCount": str(len(category_businesses)),
            "ProvidersHtml": providers_html,
        },
    )
    return render_layout(
        name,
        f"Find {name} providers in our electrolysis directory.",
        content,
        site_name=site_name,
        year=year,
    )


def _city_link(city: Projection) -> str:
    label = _location_label(city.get("city", ""), city.get("state_name", ""))
    return f'<li><a href="/cities/{_e(city.get("slug"))}/">{_e(label)}</a></li>'


def render_html_sitemap(
    states: Sequence[Projection],
    cities: Sequence[Projection],
    categories: Sequence[Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render the human-readable sitemap.

    Only the first ``HTML_SITEMAP_CITY_LIMIT`` cities are listed inline; a
    link to the full city list is added when there are more.
    """
    state_links = "\n      ".join(
        f'<li><a href="/states/{_e(state.get("slug"))}/">{_e(state.get("state"))}</a></li>'
        for state in states
    )
    city_links = "\n      ".join(
        _city_link(city) for city in cities[:HTML_SITEMAP_CITY_LIMIT]
    )
    if len(cities) > HTML_SITEMAP_CITY_LIMIT:
        city_links += (
            f'\n      <li><a href="/sitemap/cities/">View all {len(cities)} cities</a></li>'
        )
    category_links = "\n      ".join(
        f'<li><a href="/categories/{_e(category.get("slug"))}/">'
        f'{_e(category.get("category"))}</a></li>'
        for category in categories
    )
    content = render_named_template(
        "sitemap.html",
        {
            "StateLinksHtml": state_links,
            "CityLinksHtml": city_links,
            "CategoryLinksHtml": category_links,
        },
    )
    return render_layout(
        "Sitemap",
        "Complete sitemap of electrolysis providers, cities, and states",
        content,
        site_name=site_name,
        year=year,
    )


def render_all_cities_sitemap(
    cities: Sequence[Projection],
    *,
    site_name: str = SITE_NAME,
    year: int | None = None,
) -> str:
    """Render the full city list linked from the sitemap page."""
    content = render_named_template(
        "sitemap_cities.html",
        {
            "CityCount": str(len(cities)),
            "CityLinksHtml": "\n    ".join(_city_link(city) for city in cities),
        },
    )
    return render_layout(
        "All Cities",
        "Every city in the electrolysis directory",
        content,
        site_name=site_name,
        year=year,
    )
