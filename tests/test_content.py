from pin_harvest.content import extract_candidates
from pin_harvest.models import ImageCandidate

PAGE = """
<html><body>
  <div class="Grid">
    <div class="Grid__Item">
      <img src="https://i.pinimg.com/236x314/aa/one.jpg" alt="  cats,   pets, animals ">
      <div class="PinAttributionTitle__title">
        A   very
        sleepy cat
      </div>
    </div>
    <div class="Grid__Item">
      <img src="https://i.pinimg.com/474x/bb/two.png" alt="cats, pets, animals">
    </div>
    <div class="Grid__Item">
      <img src="https://i.pinimg.com/236x/cc/three.jpg">
      <div class="PinAttributionTitle__title">   </div>
    </div>
    <div class="Grid__Item"><span>no image here</span></div>
    <div class="Grid__Item">
      <img src="https://i.pinimg.com/474x/bb/two.png" alt="cats, pets, animals">
    </div>
  </div>
  <img src="https://i.pinimg.com/75x75/outside.jpg" alt="not a result">
</body></html>
"""


def test_one_candidate_per_container_in_document_order():
    candidates = extract_candidates(PAGE)
    assert candidates == [
        ImageCandidate("https://i.pinimg.com/originals/aa/one.jpg", "A very sleepy cat"),
        ImageCandidate("https://i.pinimg.com/originals/bb/two.png", "cats"),
        ImageCandidate("https://i.pinimg.com/originals/cc/three.jpg", ""),
        ImageCandidate("", ""),
        ImageCandidate("https://i.pinimg.com/originals/bb/two.png", "cats"),
    ]


def test_no_containers_yields_no_candidates():
    assert extract_candidates("<html><body><img src='a.jpg'></body></html>") == []


def test_custom_selectors():
    html = """
    <section class="pin"><img src="/1x2/a.gif" alt="x"><b class="cap">Bold</b></section>
    """
    candidates = extract_candidates(html, result_selector="section.pin", caption_selector=".cap")
    assert candidates == [ImageCandidate("/originals/a.gif", "Bold")]
