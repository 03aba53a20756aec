"""Shared interactivity script appended to every fragment.

Listeners are delegated from ``document`` and matched by class name, so the
block stays correct when several fragments (or several copies of one) are
embedded on the same page. The ``__fraggenInteractive`` flag makes repeated
copies of the script bind only once.
"""

from __future__ import annotations

INTERACTIVITY_SCRIPT = """
<script>
(function () {
  if (window.__fraggenInteractive) {
    return;
  }
  window.__fraggenInteractive = true;

  function toggleMenu(button) {
    var nav = button.closest('[data-component="navigation"]');
    var menu = nav && nav.querySelector('.navigation__menu');
    if (!menu) {
      return;
    }
    var isOpen = menu.classList.toggle('navigation__menuOpen');
    button.setAttribute('aria-expanded', isOpen ? 'true' : 'false');
  }

  function toggleReadMore(button) {
    var card = button.closest('.content-section__card');
    var description = card && card.querySelector('.content-section__cardDescription');
    if (!description) {
      return;
    }
    var expanded = description.classList.toggle('content-section__expanded');
    button.setAttribute('data-expand', expanded ? 'true' : 'false');
    button.textContent = expanded ? 'Read less' : 'Read more';
  }

  function selectLocation(tab) {
    var carousel = tab.closest('[data-component="locations-carousel"]');
    if (!carousel) {
      return;
    }
    var index = tab.getAttribute('data-location-index');
    carousel.querySelectorAll('.locations-carousel__tab').forEach(function (item) {
      var active = item === tab;
      item.classList.toggle('locations-carousel__tabActive', active);
      item.setAttribute('aria-selected', active ? 'true' : 'false');
    });
    carousel.querySelectorAll('.locations-carousel__progressDot').forEach(function (dot) {
      dot.classList.toggle(
        'locations-carousel__progressDotActive',
        dot.getAttribute('data-location-index') === index
      );
    });
    carousel.querySelectorAll('.locations-carousel__bottomContentInner').forEach(function (panel) {
      panel.hidden = panel.getAttribute('data-location-index') !== index;
    });
    var track = carousel.querySelector('.locations-carousel__carouselTrack');
    if (track) {
      track.style.setProperty('--slide-index', index);
    }
  }

  document.addEventListener('click', function (event) {
    var target = event.target;
    if (!(target instanceof Element)) {
      return;
    }
    var toggle = target.closest('.navigation__mobileToggle');
    if (toggle) {
      toggleMenu(toggle);
      return;
    }
    var readMore = target.closest('.content-section__readMoreButton');
    if (readMore) {
      toggleReadMore(readMore);
      return;
    }
    var tab = target.closest('.locations-carousel__tab');
    if (tab) {
      selectLocation(tab);
    }
  });
})();
</script>
"""

__all__ = ["INTERACTIVITY_SCRIPT"]
